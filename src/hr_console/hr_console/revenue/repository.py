from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Revenue


class RevenueRepository(Protocol):
    def list_working_set(self, *, limit: int = 1000) -> Sequence[Revenue]:
        raise NotImplementedError

    def get(self, *, revenue_id: int) -> Optional[Revenue]:
        raise NotImplementedError

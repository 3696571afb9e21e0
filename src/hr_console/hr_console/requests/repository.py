from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import EmployeeRequest


class EmployeeRequestRepository(Protocol):
    def list_working_set(self, *, limit: int = 1000) -> Sequence[EmployeeRequest]:
        """Return the newest requests (the page filters them in memory)."""

        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[EmployeeRequest]:
        raise NotImplementedError

    # Bulk actions
    def update_status(self, *, request_ids: Sequence[int], status: RequestStatus) -> int:
        raise NotImplementedError

    def assign(self, *, request_ids: Sequence[int], assignee: str) -> int:
        raise NotImplementedError

    def delete(self, *, request_ids: Sequence[int]) -> int:
        raise NotImplementedError

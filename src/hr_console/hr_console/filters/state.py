from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..core.exceptions import ValidationError

FilterValue = Union[str, int, float, date, None]

SEARCH = "search"
SEGMENT = "segment"


def is_empty_filter(value: Any) -> bool:
    """An unset filter means "no constraint", not "match empty"."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


class FilterState:
    """Filter values of one host page.

    Created from declared defaults; changed only through ``set_filters``
    (several keys replaced at once) and reset with ``clear``. ``search`` and
    ``segment`` are always available on top of the declared filters.
    """

    def __init__(self, defaults: Optional[Mapping[str, FilterValue]] = None, *, search: str = "", segment: FilterValue = None):
        self._defaults: dict[str, FilterValue] = dict(defaults or {})
        self._defaults.setdefault(SEARCH, search)
        self._defaults.setdefault(SEGMENT, segment)
        self._values: dict[str, FilterValue] = dict(self._defaults)

    @property
    def values(self) -> Mapping[str, FilterValue]:
        return MappingProxyType(self._values)

    @property
    def defaults(self) -> Mapping[str, FilterValue]:
        return MappingProxyType(self._defaults)

    @property
    def search(self) -> str:
        return str(self._values.get(SEARCH) or "")

    @property
    def segment(self) -> FilterValue:
        return self._values.get(SEGMENT)

    def get(self, name: str) -> FilterValue:
        return self._values.get(name)

    def set_filters(self, updates: Mapping[str, FilterValue]) -> dict[str, FilterValue]:
        """Replace several filters in one step; returns the applied changes."""
        unknown = [k for k in updates if k not in self._defaults]
        if unknown:
            raise ValidationError(f"Bộ lọc không hợp lệ: {', '.join(sorted(unknown))}")
        self._values.update(updates)
        return dict(updates)

    def clear(self) -> None:
        self._values = dict(self._defaults)

    @property
    def active_filters(self) -> dict[str, FilterValue]:
        """Non-empty filters only (what a query would send)."""
        return {k: v for k, v in self._values.items() if not is_empty_filter(v)}

    @property
    def has_active_filters(self) -> bool:
        return self.active_count > 0

    @property
    def active_count(self) -> int:
        return sum(
            1 for k, v in self._values.items() if not is_empty_filter(v) and v != self._defaults.get(k)
        )

    def to_query(self) -> dict[str, str]:
        """Active filters as query-string values (dates as YYYY-MM-DD)."""
        out: dict[str, str] = {}
        for k, v in self.active_filters.items():
            out[k] = v.isoformat() if isinstance(v, date) else str(v)
        return out

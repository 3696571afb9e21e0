from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from numbers import Number
from typing import Any, Mapping, Optional, Sequence

from .cells import is_missing
from .columns import ColumnSpec, resolve_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    descending: bool = False

    @property
    def active(self) -> bool:
        return self.key is not None

    def toggle(self, key: str) -> "SortState":
        """A new key sorts ascending; the same key flips the direction."""
        if key == self.key:
            return SortState(key=key, descending=not self.descending)
        return SortState(key=key, descending=False)

    def direction_for(self, key: str) -> Optional[str]:
        if key != self.key:
            return None
        return "desc" if self.descending else "asc"


def _sort_key(value: Any) -> tuple:
    # numbers < dates < text; bools count as numbers
    if isinstance(value, Number):
        return (0, float(value))  # type: ignore[arg-type]
    if isinstance(value, datetime):
        return (1, value.replace(tzinfo=None))
    if isinstance(value, date):
        return (1, datetime(value.year, value.month, value.day))
    return (2, str(value).lower())


def stable_sort(records: Sequence[Mapping[str, Any]], key: str, *, descending: bool = False) -> list[Mapping[str, Any]]:
    """Stable sort on one field; records missing the field always go last."""
    present = [r for r in records if not is_missing(resolve_value(r, key))]
    missing = [r for r in records if is_missing(resolve_value(r, key))]
    ordered = sorted(present, key=lambda r: _sort_key(resolve_value(r, key)), reverse=descending)
    return ordered + missing


def sort_records(
    records: Sequence[Mapping[str, Any]],
    columns: Sequence[ColumnSpec],
    state: SortState,
) -> list[Mapping[str, Any]]:
    if not state.active:
        return list(records)
    column = next((c for c in columns if c.key == state.key), None)
    if column is None or not column.sortable:
        logger.debug("Ignoring sort on non-sortable key %r", state.key)
        return list(records)
    return stable_sort(records, column.key, descending=state.descending)

"""Client-side filter pipeline.

All predicates are AND-combined and evaluated against an in-memory working
set; the order of the input is preserved (no sorting here). Derived counts
(tab badges, statistic cards) are computed from the unfiltered working set
with the same predicates.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import end_of_day, start_of_day, to_date, to_datetime
from ..core.exceptions import ParseFailure
from ..tables.cells import parse_amount
from ..tables.columns import resolve_value
from .state import FilterState, is_empty_filter

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
Predicate = Callable[[Record], bool]


@dataclass(frozen=True)
class DateRangeFilter:
    field: str
    from_name: str = "fromDate"
    to_name: str = "toDate"


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive numeric range (e.g. minAmount/maxAmount)."""

    field: str
    min_name: str
    max_name: str


@dataclass(frozen=True)
class FilterSpec:
    """What a host page filters on.

    exact_fields maps a filter name to the record field it constrains
    (``{"department": "department_name"}``).
    """

    search_fields: tuple[str, ...] = ()
    exact_fields: Mapping[str, str] = field(default_factory=dict)
    date_ranges: tuple[DateRangeFilter, ...] = ()
    amount_ranges: tuple[RangeFilter, ...] = ()
    segment_field: Optional[str] = None

    def defaults(self) -> dict[str, Any]:
        """Empty defaults for every declared filter name."""
        out: dict[str, Any] = {name: "" for name in self.exact_fields}
        for dr in self.date_ranges:
            out[dr.from_name] = ""
            out[dr.to_name] = ""
        for rf in self.amount_ranges:
            out[rf.min_name] = ""
            out[rf.max_name] = ""
        return out

    def new_state(self) -> FilterState:
        return FilterState(self.defaults())


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def matches_exact(record: Record, field_name: str, value: Any) -> bool:
    if is_empty_filter(value):
        return True
    actual = resolve_value(record, field_name)
    if actual == value:
        return True
    # enums and ids arrive from query strings as text
    return actual is not None and _text(getattr(actual, "value", actual)) == _text(getattr(value, "value", value))


def matches_search(record: Record, fields: Sequence[str], term: Any) -> bool:
    needle = _text(term).lower()
    if not needle:
        return True
    return any(needle in _text(resolve_value(record, f)).lower() for f in fields)


def _date_bound(value: Any, name: str) -> Optional[date]:
    if is_empty_filter(value):
        return None
    try:
        return to_date(value)
    except ParseFailure:
        logger.info("Ignoring unparseable date filter %s=%r", name, value)
        return None


def _amount_bound(value: Any, name: str) -> Optional[float]:
    if is_empty_filter(value):
        return None
    try:
        return parse_amount(value)
    except ParseFailure:
        logger.info("Ignoring unparseable amount filter %s=%r", name, value)
        return None


def matches_date_range(record: Record, field_name: str, from_value: Any, to_value: Any) -> bool:
    lower = _date_bound(from_value, "from")
    upper = _date_bound(to_value, "to")
    if lower is None and upper is None:
        return True
    try:
        ts = to_datetime(resolve_value(record, field_name))
    except ParseFailure:
        return False
    if lower is not None and ts < start_of_day(lower):
        return False
    if upper is not None and ts > end_of_day(upper):
        return False
    return True


def matches_amount_range(record: Record, field_name: str, min_value: Any, max_value: Any) -> bool:
    lower = _amount_bound(min_value, "min")
    upper = _amount_bound(max_value, "max")
    if lower is None and upper is None:
        return True
    try:
        amount = parse_amount(resolve_value(record, field_name))
    except ParseFailure:
        return False
    if lower is not None and amount < lower:
        return False
    if upper is not None and amount > upper:
        return False
    return True


def build_predicates(spec: FilterSpec, state: FilterState) -> list[Predicate]:
    """One predicate per active filter."""
    preds: list[Predicate] = []

    if spec.search_fields and state.search:
        term = state.search
        preds.append(lambda r: matches_search(r, spec.search_fields, term))

    for name, field_name in spec.exact_fields.items():
        value = state.get(name)
        if not is_empty_filter(value):
            preds.append(lambda r, f=field_name, v=value: matches_exact(r, f, v))

    for dr in spec.date_ranges:
        lo, hi = state.get(dr.from_name), state.get(dr.to_name)
        if not (is_empty_filter(lo) and is_empty_filter(hi)):
            preds.append(lambda r, f=dr.field, lo=lo, hi=hi: matches_date_range(r, f, lo, hi))

    for rf in spec.amount_ranges:
        lo, hi = state.get(rf.min_name), state.get(rf.max_name)
        if not (is_empty_filter(lo) and is_empty_filter(hi)):
            preds.append(lambda r, f=rf.field, lo=lo, hi=hi: matches_amount_range(r, f, lo, hi))

    if spec.segment_field and not is_empty_filter(state.segment):
        seg_field, seg = spec.segment_field, state.segment
        preds.append(lambda r: matches_exact(r, seg_field, seg))

    return preds


def apply_filters(records: Iterable[Record], spec: FilterSpec, state: FilterState) -> list[Record]:
    preds = build_predicates(spec, state)
    return [r for r in records if all(p(r) for p in preds)]


def count_where(records: Iterable[Record], predicate: Predicate) -> int:
    return sum(1 for r in records if predicate(r))


def count_by(records: Iterable[Record], field_name: str, values: Optional[Iterable[Any]] = None) -> dict[Any, int]:
    """Exact-match counts per value of ``field_name``.

    With ``values`` the result has exactly those keys (zero when absent),
    counted with the same predicate the filters use.
    """
    records = list(records)
    if values is None:
        counter = Counter(_text(resolve_value(r, field_name)) for r in records)
        return dict(counter)
    return {v: count_where(records, lambda r, v=v: matches_exact(r, field_name, v)) for v in values}


def segment_counts(all_records: Iterable[Record], spec: FilterSpec, segments: Iterable[Any]) -> dict[Any, int]:
    """Tab badge counts from the unfiltered working set; key "" is the "All" tab."""
    records = list(all_records)
    counts: dict[Any, int] = {"": len(records)}
    if spec.segment_field:
        counts.update(count_by(records, spec.segment_field, segments))
    return counts

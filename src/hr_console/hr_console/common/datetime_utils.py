from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from ..core.exceptions import ParseFailure


def to_datetime(value: Any) -> datetime:
    """Read a record timestamp as a naive datetime.

    Accepts datetime, date, epoch seconds and ISO strings (with an optional
    trailing ``Z``). Timezone-aware values keep their wall-clock time.
    Raises ParseFailure for anything else.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, bool):
        raise ParseFailure(f"Not a date: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError) as e:
            raise ParseFailure(f"Not a date: {value!r}") from e
    if isinstance(value, str):
        v = value.strip()
        if not v:
            raise ParseFailure("Empty date")
        if v.endswith(("Z", "z")):
            v = v[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(v).replace(tzinfo=None)
        except ValueError as e:
            raise ParseFailure(f"Not a date: {value!r}") from e
    raise ParseFailure(f"Unsupported date value type: {type(value)!r}")


def to_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return to_datetime(value).date()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """23:59:59.999999 of the given day (inclusive upper bound)."""
    return datetime.combine(day, time.max)

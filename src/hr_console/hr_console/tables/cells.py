from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.datetime_utils import to_datetime
from ..core.constants import DEFAULT_CURRENCY_SYMBOL, DEFAULT_DATE_FORMAT, FALLBACK_TEXT
from ..core.enums import DisplayKind
from ..core.exceptions import ParseFailure


@dataclass(frozen=True)
class BadgeStyle:
    style_class: str
    text: str


@dataclass(frozen=True)
class Cell:
    """Renderable produced by the built-in display kinds.

    ``details`` holds secondary lines (email, unit name, ...); ``initial`` is the
    avatar letter for avatar/nested-summary cells.
    """

    kind: DisplayKind
    text: str
    style: Optional[str] = None
    initial: Optional[str] = None
    details: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class RenderOptions:
    date_format: str = DEFAULT_DATE_FORMAT
    fallback_text: str = FALLBACK_TEXT


def is_missing(value: Any) -> bool:
    """None, empty string and empty collections are missing; 0 and False are not."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def format_text(value: Any, fallback: str = FALLBACK_TEXT) -> str:
    if is_missing(value):
        return fallback
    text = str(value)
    return text if text else fallback


def resolve_path(value: Any, path: str) -> Any:
    """Walk ``a.b.c`` through nested mappings; None when a step is absent."""
    current = value
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def parse_amount(value: Any) -> float:
    if isinstance(value, bool) or is_missing(value):
        raise ParseFailure(f"Not a number: {value!r}")
    try:
        if isinstance(value, (int, float, Decimal)):
            amount = float(value)
        else:
            amount = float(str(value).strip().replace(",", ""))
    except (TypeError, ValueError, OverflowError) as e:
        raise ParseFailure(f"Not a number: {value!r}") from e
    if not math.isfinite(amount):
        raise ParseFailure(f"Not a finite number: {value!r}")
    return amount


def format_amount(amount: float, *, precise: bool = False, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format money with thousands separators.

    precise=True always shows two decimals (transaction amounts); otherwise up
    to three decimals with trailing zeros dropped (dashboard summaries).
    """
    if amount == 0:
        amount = 0.0
    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)
    if precise:
        body = f"{magnitude:,.2f}"
    else:
        body = f"{magnitude:,.3f}".rstrip("0").rstrip(".")
    return f"{sign}{symbol}{body}"


def format_date(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    try:
        return to_datetime(value).strftime(date_format)
    except (ValueError, OverflowError) as e:
        # strftime rejects some years on some platforms
        raise ParseFailure(f"Cannot format date: {value!r}") from e

"""Column specifications.

A column pairs a record key with one display variant. The variants form a
closed set; each knows how to turn a raw value into a renderable (Strategy
Pattern), and only the badge variant carries a badge map, only the
computed/custom variants carry a function.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Mapping, Optional

from ..core.constants import DEFAULT_CURRENCY_SYMBOL, GENERIC_BADGE_STYLE, UNASSIGNED_INITIAL, UNASSIGNED_TEXT
from ..core.enums import DisplayKind
from ..core.exceptions import ParseFailure, ValidationError
from .cells import (
    BadgeStyle,
    Cell,
    RenderOptions,
    format_amount,
    format_date,
    format_text,
    is_missing,
    parse_amount,
    resolve_path,
)

Record = Mapping[str, Any]
CellFn = Callable[[Any, Record], Any]


class CellDisplay(ABC):
    kind: ClassVar[DisplayKind]

    @abstractmethod
    def render(self, value: Any, record: Record, options: RenderOptions) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Text(CellDisplay):
    kind = DisplayKind.TEXT

    def render(self, value: Any, record: Record, options: RenderOptions) -> Cell:
        return Cell(self.kind, format_text(value, options.fallback_text))


@dataclass(frozen=True)
class Badge(CellDisplay):
    kind = DisplayKind.BADGE

    badge_map: Mapping[Any, BadgeStyle] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {}
        for raw, style in dict(self.badge_map).items():
            if isinstance(style, BadgeStyle):
                normalized[raw] = style
            elif isinstance(style, Mapping):
                normalized[raw] = BadgeStyle(
                    style_class=str(style.get("style_class", style.get("className", GENERIC_BADGE_STYLE))),
                    text=str(style.get("text", raw)),
                )
            else:
                style_class, text = style
                normalized[raw] = BadgeStyle(style_class=str(style_class), text=str(text))
        object.__setattr__(self, "badge_map", normalized)

    def lookup(self, value: Any) -> Optional[BadgeStyle]:
        try:
            return self.badge_map.get(value)
        except TypeError:
            # unhashable raw value (list, dict)
            return None

    def render(self, value: Any, record: Record, options: RenderOptions) -> Cell:
        style = self.lookup(value)
        if style is None:
            text = options.fallback_text if is_missing(value) else (str(value).upper() or options.fallback_text)
            return Cell(self.kind, text, style=GENERIC_BADGE_STYLE)
        return Cell(self.kind, style.text or options.fallback_text, style=style.style_class)


@dataclass(frozen=True)
class DateDisplay(CellDisplay):
    kind = DisplayKind.DATE

    def render(self, value: Any, record: Record, options: RenderOptions) -> Cell:
        if is_missing(value):
            return Cell(self.kind, options.fallback_text)
        try:
            return Cell(self.kind, format_date(value, options.date_format))
        except ParseFailure:
            return Cell(self.kind, options.fallback_text)


@dataclass(frozen=True)
class Currency(CellDisplay):
    """Money column.

    precise=False is the dashboard style ($1,234.5), precise=True the
    transaction style ($1,234.50).
    """

    kind = DisplayKind.CURRENCY

    precise: bool = False
    symbol: str = DEFAULT_CURRENCY_SYMBOL

    def amount(self, value: Any) -> float:
        try:
            return parse_amount(value)
        except ParseFailure:
            return 0.0

    def render(self, value: Any, record: Record, options: RenderOptions) -> Cell:
        return Cell(self.kind, format_amount(self.amount(value), precise=self.precise, symbol=self.symbol))


@dataclass(frozen=True)
class Avatar(CellDisplay):
    kind = DisplayKind.AVATAR

    placeholder: str = UNASSIGNED_TEXT
    initial_fallback: str = UNASSIGNED_INITIAL

    def render(self, value: Any, record: Record, options: RenderOptions) -> Cell:
        text = "" if is_missing(value) else str(value).strip()
        if not text:
            return Cell(self.kind, self.placeholder, initial=self.initial_fallback)
        return Cell(self.kind, text, initial=text[0].upper())


@dataclass(frozen=True)
class NestedSummary(CellDisplay):
    """Summary of a nested object: a title line plus optional detail lines.

    title_fields are joined with spaces (e.g. firstName + lastName);
    detail_fields may be dotted paths (e.g. ``unit.name``).
    """

    kind = DisplayKind.NESTED_SUMMARY

    title_fields: tuple[str, ...] = ("name",)
    detail_fields: tuple[str, ...] = ()
    placeholder: str = UNASSIGNED_TEXT
    initial_fallback: str = UNASSIGNED_INITIAL

    def render(self, value: Any, record: Record, options: RenderOptions) -> Cell:
        if is_missing(value):
            return Cell(self.kind, self.placeholder, initial=self.initial_fallback)

        if not isinstance(value, Mapping):
            title = str(value).strip()
            details: tuple[str, ...] = ()
        else:
            parts = [resolve_path(value, f) for f in self.title_fields]
            title = " ".join(str(p).strip() for p in parts if not is_missing(p)).strip()
            details = tuple(
                str(d) for d in (resolve_path(value, f) for f in self.detail_fields) if not is_missing(d)
            )

        if not title:
            return Cell(self.kind, self.placeholder, initial=self.initial_fallback, details=details)
        return Cell(self.kind, title, initial=title[0].upper(), details=details)


@dataclass(frozen=True)
class Computed(CellDisplay):
    """Value derived from the record (e.g. amount x rate)."""

    kind = DisplayKind.COMPUTED

    fn: CellFn = field(default=lambda value, record: value)

    def render(self, value: Any, record: Record, options: RenderOptions) -> Any:
        return self.fn(value, record)


@dataclass(frozen=True)
class Custom(CellDisplay):
    kind = DisplayKind.CUSTOM

    fn: CellFn = field(default=lambda value, record: value)

    def render(self, value: Any, record: Record, options: RenderOptions) -> Any:
        return self.fn(value, record)


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    label: str
    display: CellDisplay = field(default_factory=Text)
    sortable: bool = False
    width: Optional[str] = None
    class_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValidationError("Cột phải có key")
        if not isinstance(self.display, CellDisplay):
            raise ValidationError(f"Kiểu hiển thị không hợp lệ cho cột {self.key!r}")

    @property
    def display_kind(self) -> DisplayKind:
        return self.display.kind


def text_column(key: str, label: str, **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, Text(), **opts)


def badge_column(key: str, label: str, badge_map: Mapping[Any, Any], **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, Badge(badge_map), **opts)


def date_column(key: str, label: str, **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, DateDisplay(), **opts)


def currency_column(key: str, label: str, *, precise: bool = False, symbol: str = DEFAULT_CURRENCY_SYMBOL, **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, Currency(precise=precise, symbol=symbol), **opts)


def avatar_column(key: str, label: str, *, placeholder: str = UNASSIGNED_TEXT, **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, Avatar(placeholder=placeholder), **opts)


def nested_summary_column(
    key: str,
    label: str,
    *,
    title_fields: tuple[str, ...] = ("name",),
    detail_fields: tuple[str, ...] = (),
    placeholder: str = UNASSIGNED_TEXT,
    initial_fallback: str = UNASSIGNED_INITIAL,
    **opts: Any,
) -> ColumnSpec:
    display = NestedSummary(
        title_fields=tuple(title_fields),
        detail_fields=tuple(detail_fields),
        placeholder=placeholder,
        initial_fallback=initial_fallback,
    )
    return ColumnSpec(key, label, display, **opts)


def computed_column(key: str, label: str, fn: CellFn, **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, Computed(fn), **opts)


def custom_column(key: str, label: str, fn: CellFn, **opts: Any) -> ColumnSpec:
    return ColumnSpec(key, label, Custom(fn), **opts)


def resolve_value(record: Record, key: str) -> Any:
    """Direct field first, then a dotted walk through nested mappings."""
    if not isinstance(record, Mapping):
        return None
    if key in record:
        return record[key]
    if "." in key:
        return resolve_path(record, key)
    return None

from __future__ import annotations

import logging
from typing import Any, Sequence

from ..core.constants import DEFAULT_DATE_FORMAT, FALLBACK_TEXT
from .cells import Cell, RenderOptions, format_text
from .columns import ColumnSpec, Record, resolve_value

logger = logging.getLogger(__name__)


class CellRenderer:
    """Turns (column, raw value, record) into a renderable.

    Total by contract: whatever the record holds, every cell gets some
    display. Host-provided custom functions that raise fall back to the plain
    text of the raw value.
    """

    def __init__(self, *, date_format: str = DEFAULT_DATE_FORMAT, fallback_text: str = FALLBACK_TEXT):
        self._options = RenderOptions(date_format=date_format, fallback_text=fallback_text)

    @property
    def options(self) -> RenderOptions:
        return self._options

    def render(self, column: ColumnSpec, raw_value: Any, record: Record) -> Any:
        try:
            return column.display.render(raw_value, record, self._options)
        except Exception:
            logger.warning("Cell render failed for column %r; using text fallback", column.key, exc_info=True)
            return Cell(column.display_kind, format_text(raw_value, self._options.fallback_text))

    def render_row(self, columns: Sequence[ColumnSpec], record: Record) -> list[Any]:
        return [self.render(c, resolve_value(record, c.key), record) for c in columns]

    def plain_text(self, column: ColumnSpec, record: Record) -> str:
        """Cell as a single line of text (exports, titles)."""
        rendered = self.render(column, resolve_value(record, column.key), record)
        if isinstance(rendered, Cell):
            return rendered.text
        return format_text(rendered, self._options.fallback_text)


_default_renderer = CellRenderer()


def render_cell(column: ColumnSpec, raw_value: Any, record: Record) -> Any:
    return _default_renderer.render(column, raw_value, record)

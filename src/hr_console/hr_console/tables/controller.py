from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_EMPTY_MESSAGE, DEFAULT_PAGE_SIZE
from ..core.enums import TableStatus
from ..core.exceptions import OutOfRangeNavigation, ValidationError
from .columns import ColumnSpec
from .pagination import PaginationView, build_pagination, ensure_page_in_range, total_pages
from .renderer import CellRenderer
from .sorting import SortState

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]
PageChangeHandler = Callable[[int], None]
RowClickHandler = Callable[[Record], None]
SelectionHandler = Callable[[frozenset], None]


def record_id(record: Record) -> str:
    """Selection key of a record: its ``id`` as a string ('' when absent)."""
    value = record.get("id") if isinstance(record, Mapping) else None
    return "" if value is None else str(value)


@dataclass
class TableState:
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0
    selected_ids: set[str] = field(default_factory=set)

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_items, self.page_size)


@dataclass(frozen=True)
class HeaderView:
    key: str
    label: str
    sortable: bool
    width: Optional[str] = None
    class_name: Optional[str] = None
    sort_direction: Optional[str] = None


@dataclass(frozen=True)
class RowView:
    id: str
    record: Record
    cells: list[Any]
    selected: bool


@dataclass(frozen=True)
class TableView:
    status: TableStatus
    headers: list[HeaderView]
    rows: list[RowView]
    pagination: PaginationView
    selectable: bool
    all_selected: bool
    partially_selected: bool
    selected_ids: frozenset
    empty_message: str

    @property
    def is_loading(self) -> bool:
        return self.status == TableStatus.LOADING

    @property
    def is_empty(self) -> bool:
        return self.status == TableStatus.EMPTY


class TableController:
    """Selection + pagination state of one mounted table.

    The controller never fetches. The host reports a fetch in flight with
    ``set_loading()`` and hands over the materialized page with ``set_data``;
    the controller answers with events (page changed, row clicked, selection
    changed) and a ``TableView`` to render.
    """

    def __init__(
        self,
        columns: Sequence[ColumnSpec],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        selectable: bool = False,
        renderer: Optional[CellRenderer] = None,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
        on_page_change: Optional[PageChangeHandler] = None,
        on_row_click: Optional[RowClickHandler] = None,
        on_selection_change: Optional[SelectionHandler] = None,
    ):
        if page_size <= 0:
            raise ValidationError("Số bản ghi mỗi trang phải > 0")
        self._columns = list(columns)
        self._renderer = renderer or CellRenderer()
        self._selectable = selectable
        self._empty_message = empty_message
        self._on_page_change = on_page_change
        self._on_row_click = on_row_click
        self._on_selection_change = on_selection_change

        self._rows: list[Record] = []
        self._loading = True
        self.state = TableState(page_size=page_size)

    # -------- data --------
    @property
    def columns(self) -> list[ColumnSpec]:
        return list(self._columns)

    @property
    def rows(self) -> list[Record]:
        return list(self._rows)

    @property
    def status(self) -> TableStatus:
        if self._loading:
            return TableStatus.LOADING
        return TableStatus.POPULATED if self._rows else TableStatus.EMPTY

    @property
    def total_pages(self) -> int:
        return self.state.total_pages

    @property
    def page_ids(self) -> list[str]:
        return [record_id(r) for r in self._rows]

    def set_loading(self, loading: bool = True) -> None:
        self._loading = loading

    def set_data(
        self,
        rows: Iterable[Record],
        *,
        total_items: Optional[int] = None,
        current_page: Optional[int] = None,
    ) -> None:
        """Hand over the materialized page.

        ``total_items`` may be a server-side total larger than ``len(rows)``.
        The selection is pruned to ids present in the new rows.
        """
        self._rows = list(rows)
        self._loading = False
        self.state.total_items = len(self._rows) if total_items is None else max(int(total_items), 0)
        if current_page is not None:
            self.state.current_page = max(int(current_page), 1)

        present = set(self.page_ids)
        kept = self.state.selected_ids & present
        if kept != self.state.selected_ids:
            self._set_selection(kept)

    # -------- selection --------
    @property
    def selected_ids(self) -> frozenset:
        return frozenset(self.state.selected_ids)

    @property
    def is_all_selected(self) -> bool:
        ids = set(self.page_ids)
        return bool(ids) and self.state.selected_ids == ids

    @property
    def is_partially_selected(self) -> bool:
        n = len(self.state.selected_ids)
        return 0 < n < len(set(self.page_ids))

    def toggle_select_all(self) -> frozenset:
        ids = set(self.page_ids)
        if self.state.selected_ids == ids:
            self._set_selection(set())
        else:
            self._set_selection(ids)
        return self.selected_ids

    def toggle_select_row(self, row_id: Any) -> frozenset:
        rid = str(row_id)
        if rid not in set(self.page_ids):
            logger.debug("Ignoring selection of row %r not on the current page", rid)
            return self.selected_ids
        self._set_selection(self.state.selected_ids ^ {rid})
        return self.selected_ids

    def clear_selection(self) -> None:
        if self.state.selected_ids:
            self._set_selection(set())

    def _set_selection(self, ids: set[str]) -> None:
        self.state.selected_ids = set(ids)
        if self._on_selection_change:
            self._on_selection_change(frozenset(ids))

    # -------- navigation --------
    def change_page(self, page: int) -> bool:
        """Move to ``page``; out-of-range requests are ignored.

        Selection does not survive a page change (bulk actions only apply to
        the visible page).
        """
        try:
            page = ensure_page_in_range(int(page), self.total_pages)
        except (OutOfRangeNavigation, TypeError, ValueError):
            logger.debug("Ignoring page change to %r (total_pages=%s)", page, self.total_pages)
            return False

        self.state.current_page = page
        self.clear_selection()
        if self._on_page_change:
            self._on_page_change(page)
        return True

    def row_click(self, record: Record) -> None:
        if self._on_row_click:
            self._on_row_click(record)

    # -------- view --------
    def render(self, *, sort: Optional[SortState] = None) -> TableView:
        sort = sort or SortState()
        headers = [
            HeaderView(
                key=c.key,
                label=c.label,
                sortable=c.sortable,
                width=c.width,
                class_name=c.class_name,
                sort_direction=sort.direction_for(c.key) if c.sortable else None,
            )
            for c in self._columns
        ]

        rows: list[RowView] = []
        if not self._loading:
            for record in self._rows:
                rid = record_id(record)
                rows.append(
                    RowView(
                        id=rid,
                        record=record,
                        cells=self._renderer.render_row(self._columns, record),
                        selected=rid in self.state.selected_ids,
                    )
                )

        return TableView(
            status=self.status,
            headers=headers,
            rows=rows,
            pagination=build_pagination(self.state.current_page, self.state.total_items, self.state.page_size),
            selectable=self._selectable,
            all_selected=self.is_all_selected,
            partially_selected=self.is_partially_selected,
            selected_ids=self.selected_ids,
            empty_message=self._empty_message,
        )

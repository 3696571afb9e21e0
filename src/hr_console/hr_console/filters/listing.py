from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..common.validators import parse_positive_int
from ..core.constants import DEFAULT_EMPTY_MESSAGE, DEFAULT_PAGE_SIZE
from ..tables.columns import ColumnSpec
from ..tables.controller import RowClickHandler, SelectionHandler, TableController, TableView
from ..tables.pagination import paginate
from ..tables.renderer import CellRenderer
from ..tables.sorting import SortState, sort_records
from .pipeline import FilterSpec, apply_filters, segment_counts
from .state import SEARCH, FilterState, FilterValue

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


@dataclass(frozen=True)
class ListingView:
    table: TableView
    filters: Mapping[str, FilterValue]
    active_filter_count: int
    segment: FilterValue
    segment_counts: Mapping[Any, int]
    total_filtered: int
    total_unfiltered: int
    sort: SortState


class ListingPage:
    """Page container: working set -> filter -> sort -> paginate -> table.

    Every user action (filter change, clear, tab switch, sort, page change)
    re-runs the whole chain in one call so the table never shows a page count
    computed from a stale filtered set. Any filter change goes back to page 1.
    """

    def __init__(
        self,
        columns: Sequence[ColumnSpec],
        spec: FilterSpec,
        *,
        records: Optional[Iterable[Record]] = None,
        segments: Sequence[Any] = (),
        page_size: int = DEFAULT_PAGE_SIZE,
        selectable: bool = False,
        renderer: Optional[CellRenderer] = None,
        empty_message: str = DEFAULT_EMPTY_MESSAGE,
        on_row_click: Optional[RowClickHandler] = None,
        on_selection_change: Optional[SelectionHandler] = None,
        on_page_change: Optional[Callable[[int], None]] = None,
        on_filters_change: Optional[Callable[[dict], None]] = None,
        on_clear_filters: Optional[Callable[[], None]] = None,
    ):
        self._spec = spec
        self._segments = list(segments)
        self._on_page_change = on_page_change
        self._on_filters_change = on_filters_change
        self._on_clear_filters = on_clear_filters

        self.filters: FilterState = spec.new_state()
        self.sort = SortState()
        self.table = TableController(
            columns,
            page_size=page_size,
            selectable=selectable,
            renderer=renderer,
            empty_message=empty_message,
            on_page_change=self._handle_page_change,
            on_row_click=on_row_click,
            on_selection_change=on_selection_change,
        )

        self._all: list[Record] = []
        self._filtered: list[Record] = []
        if records is not None:
            self.load(records)

    # -------- working set --------
    @property
    def working_set(self) -> list[Record]:
        return list(self._all)

    @property
    def filtered(self) -> list[Record]:
        return list(self._filtered)

    def set_loading(self) -> None:
        self.table.set_loading(True)

    def load(self, records: Iterable[Record]) -> None:
        """Replace the working set (fresh fetch) and go back to page 1."""
        self._all = list(records)
        self._refresh(page=1)

    # -------- filters --------
    def set_filters(self, updates: Mapping[str, FilterValue]) -> None:
        applied = self.filters.set_filters(updates)
        self._refresh(page=1)
        if self._on_filters_change:
            self._on_filters_change(applied)

    def set_segment(self, segment: FilterValue) -> None:
        self.set_filters({"segment": segment})

    def clear_filters(self) -> None:
        self.filters.clear()
        self._refresh(page=1)
        if self._on_clear_filters:
            self._on_clear_filters()

    def toggle_sort(self, key: str) -> None:
        sortable = {c.key for c in self.table.columns if c.sortable}
        if key not in sortable:
            logger.debug("Column %r is not sortable", key)
            return
        self.sort = self.sort.toggle(key)
        self._refresh(page=1)

    def set_sort(self, key: Optional[str], *, descending: bool = False) -> None:
        sortable = {c.key for c in self.table.columns if c.sortable}
        self.sort = SortState(key=key, descending=descending) if key in sortable else SortState()
        self._refresh(page=1)

    # -------- navigation --------
    def change_page(self, page: int) -> bool:
        return self.table.change_page(page)

    def _handle_page_change(self, page: int) -> None:
        self._show_page(page)
        if self._on_page_change:
            self._on_page_change(page)

    def _refresh(self, *, page: int) -> None:
        self._filtered = sort_records(apply_filters(self._all, self._spec, self.filters), self.table.columns, self.sort)
        self.table.clear_selection()
        self._show_page(page)

    def _show_page(self, page: int) -> None:
        page_slice = paginate(self._filtered, page, self.table.state.page_size)
        self.table.set_data(page_slice.rows, total_items=page_slice.total, current_page=page)

    # -------- view --------
    def view(self) -> ListingView:
        return ListingView(
            table=self.table.render(sort=self.sort),
            filters=self.filters.values,
            active_filter_count=self.filters.active_count,
            segment=self.filters.segment,
            segment_counts=segment_counts(self._all, self._spec, self._segments),
            total_filtered=len(self._filtered),
            total_unfiltered=len(self._all),
            sort=self.sort,
        )

    # -------- query string --------
    def apply_query(self, args: Mapping[str, Any]) -> None:
        """Restore page state from a query string (filters, sort, page).

        Unknown names are skipped; an out-of-range ``page`` leaves page 1.
        """
        known = self.filters.defaults
        updates = {k: str(v) if k == SEARCH else str(v).strip() for k, v in args.items() if k in known}
        if updates:
            self.set_filters(updates)

        sort_key = str(args.get("sort") or "").strip()
        if sort_key:
            self.set_sort(sort_key, descending=str(args.get("direction") or "").lower() == "desc")

        page = parse_positive_int(args.get("page"), 1)
        if page != 1:
            self.change_page(page)

    def query_for(self, **overrides: Any) -> dict[str, str]:
        """Query-string values of the current state, for building links."""
        out = self.filters.to_query()
        if self.sort.active:
            out["sort"] = str(self.sort.key)
            out["direction"] = "desc" if self.sort.descending else "asc"
        out["page"] = str(self.table.state.current_page)
        for k, v in overrides.items():
            if v is None or v == "":
                out.pop(k, None)
            else:
                out[k] = str(v)
        return out

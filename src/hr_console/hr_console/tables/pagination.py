from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

from ..core.constants import MAX_PAGE_BUTTONS
from ..core.exceptions import OutOfRangeNavigation, ValidationError


def total_pages(total_items: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValidationError("Số bản ghi mỗi trang phải > 0")
    return math.ceil(max(int(total_items), 0) / page_size)


def ensure_page_in_range(page: int, pages: int) -> int:
    if page < 1 or page > pages:
        raise OutOfRangeNavigation(f"Page {page} outside 1..{pages}")
    return page


def page_window(current_page: int, pages: int, max_buttons: int = MAX_PAGE_BUTTONS) -> list[int]:
    """Page numbers to show: at most ``max_buttons``, centered on the current page."""
    if pages <= 0:
        return []
    half = max_buttons // 2
    start = max(1, min(pages - max_buttons + 1, current_page - half))
    end = min(pages, start + max_buttons - 1)
    return list(range(start, end + 1))


@dataclass(frozen=True)
class PageSlice:
    rows: list[Any]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.page_size)


def paginate(records: Sequence[Any], page: int, page_size: int) -> PageSlice:
    """Slice one page out of an already filtered collection.

    Pages past the end produce an empty slice; the total is always the size of
    the whole collection.
    """
    if page_size <= 0:
        raise ValidationError("Số bản ghi mỗi trang phải > 0")
    start = max(page - 1, 0) * page_size
    return PageSlice(rows=list(records[start : start + page_size]), total=len(records), page=page, page_size=page_size)


@dataclass(frozen=True)
class PaginationView:
    current_page: int
    total_pages: int
    total_items: int
    page_size: int
    pages: list[int]

    @property
    def show(self) -> bool:
        return self.total_pages > 1

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def first_item(self) -> int:
        if self.total_items <= 0:
            return 0
        return (self.current_page - 1) * self.page_size + 1

    @property
    def last_item(self) -> int:
        return min(self.current_page * self.page_size, self.total_items)


def build_pagination(current_page: int, total_items: int, page_size: int) -> PaginationView:
    pages = total_pages(total_items, page_size)
    return PaginationView(
        current_page=current_page,
        total_pages=pages,
        total_items=int(total_items),
        page_size=page_size,
        pages=page_window(current_page, pages),
    )

import pytest

from src.hr_console.hr_console.core.exceptions import OutOfRangeNavigation, ValidationError
from src.hr_console.hr_console.tables.pagination import (
    build_pagination,
    ensure_page_in_range,
    page_window,
    paginate,
    total_pages,
)


@pytest.mark.parametrize(
    "current,pages,expected",
    [
        (1, 0, []),
        (1, 3, [1, 2, 3]),
        (1, 10, [1, 2, 3, 4, 5]),
        (5, 10, [3, 4, 5, 6, 7]),
        (10, 10, [6, 7, 8, 9, 10]),
        (9, 10, [6, 7, 8, 9, 10]),
        (2, 10, [1, 2, 3, 4, 5]),
    ],
)
def test_page_window_is_centered_and_clamped(current, pages, expected):
    assert page_window(current, pages) == expected


def test_total_pages_rounds_up():
    assert total_pages(47, 20) == 3
    assert total_pages(0, 20) == 0
    assert total_pages(40, 20) == 2
    with pytest.raises(ValidationError):
        total_pages(10, 0)


def test_ensure_page_in_range():
    assert ensure_page_in_range(2, 3) == 2
    with pytest.raises(OutOfRangeNavigation):
        ensure_page_in_range(0, 3)
    with pytest.raises(OutOfRangeNavigation):
        ensure_page_in_range(1, 0)


def test_paginate_slices_and_reports_total():
    records = list(range(47))
    last = paginate(records, 3, 20)
    assert last.rows == list(range(40, 47))
    assert last.total == 47
    assert last.total_pages == 3
    assert paginate(records, 4, 20).rows == []


def test_last_page_summary():
    view = build_pagination(3, 47, 20)
    assert (view.first_item, view.last_item) == (41, 47)
    assert view.has_previous and not view.has_next


def test_single_page_hides_controls():
    view = build_pagination(1, 5, 20)
    assert not view.show
    assert view.pages == [1]
    empty = build_pagination(1, 0, 20)
    assert (empty.first_item, empty.last_item) == (0, 0)

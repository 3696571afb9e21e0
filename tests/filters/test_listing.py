from __future__ import annotations

import pytest

from src.hr_console.hr_console.filters.listing import ListingPage
from src.hr_console.hr_console.filters.pipeline import FilterSpec
from src.hr_console.hr_console.tables.columns import badge_column, text_column

SPEC = FilterSpec(
    search_fields=("name",),
    exact_fields={"status": "status"},
    segment_field="status",
)

COLUMNS = [
    text_column("name", "Name", sortable=True),
    badge_column("status", "Status", {}),
]


def _records(n=47, resolved=5):
    return [
        {"id": i, "name": f"Request {i:02d}", "status": "Resolved" if i <= resolved else "Pending"}
        for i in range(1, n + 1)
    ]


@pytest.fixture
def events():
    return {"filters": [], "cleared": 0, "pages": [], "selections": []}


@pytest.fixture
def page(events):
    def on_clear():
        events["cleared"] += 1

    return ListingPage(
        COLUMNS,
        SPEC,
        records=_records(),
        segments=("Pending", "Resolved"),
        page_size=20,
        selectable=True,
        on_filters_change=events["filters"].append,
        on_clear_filters=on_clear,
        on_page_change=events["pages"].append,
        on_selection_change=events["selections"].append,
    )


def test_initial_view_has_three_pages(page):
    view = page.view()
    assert view.table.pagination.total_pages == 3
    assert view.table.pagination.pages == [1, 2, 3]
    assert len(view.table.rows) == 20
    assert view.total_unfiltered == 47


def test_filter_change_resets_to_page_one_and_recomputes_pages(page, events):
    assert page.change_page(2)
    assert events["pages"] == [2]
    assert page.view().table.rows[0].id == "21"

    page.set_filters({"status": "Resolved"})
    view = page.view()
    assert view.table.pagination.current_page == 1
    assert view.table.pagination.total_pages == 1
    assert not view.table.pagination.show
    assert 2 not in view.table.pagination.pages
    assert [r.id for r in view.table.rows] == ["1", "2", "3", "4", "5"]
    assert events["filters"] == [{"status": "Resolved"}]


def test_identical_filter_values_still_reset_page(page):
    page.set_filters({"status": "Pending"})
    assert page.change_page(2)
    page.set_filters({"status": "Pending"})
    assert page.table.state.current_page == 1


def test_navigation_past_last_page_is_ignored(page):
    assert page.change_page(4) is False
    assert page.change_page(0) is False
    assert page.table.state.current_page == 1


def test_clear_filters_restores_full_set(page, events):
    page.set_filters({"status": "Resolved", "search": "Request 0"})
    assert page.view().active_filter_count == 2
    page.clear_filters()
    view = page.view()
    assert view.total_filtered == 47
    assert view.active_filter_count == 0
    assert events["cleared"] == 1


def test_segment_counts_ignore_active_filters(page):
    page.set_segment("Resolved")
    view = page.view()
    assert view.segment == "Resolved"
    assert view.total_filtered == 5
    assert view.segment_counts == {"": 47, "Pending": 42, "Resolved": 5}


def test_filter_change_clears_selection(page, events):
    page.table.toggle_select_all()
    assert len(page.table.selected_ids) == 20
    page.set_filters({"search": "Request 1"})
    assert page.table.selected_ids == frozenset()
    assert events["selections"][-1] == frozenset()


def test_sort_toggles_and_resets_page(page):
    page.change_page(3)
    page.toggle_sort("name")
    assert page.table.state.current_page == 1
    assert page.view().table.rows[0].id == "1"

    page.toggle_sort("name")
    view = page.view()
    assert view.table.rows[0].id == "47"
    assert view.table.headers[0].sort_direction == "desc"


def test_sort_on_non_sortable_column_is_ignored(page):
    page.toggle_sort("status")
    assert not page.sort.active


def test_apply_query_restores_state(page):
    page.apply_query({"status": "Pending", "sort": "name", "direction": "desc", "page": "2", "unknown": "x"})
    view = page.view()
    assert view.filters["status"] == "Pending"
    assert view.total_filtered == 42
    assert view.table.pagination.current_page == 2
    assert view.table.rows[0].id == "27"
    assert page.query_for(page=3) == {"status": "Pending", "sort": "name", "direction": "desc", "page": "3"}


def test_apply_query_with_out_of_range_page_stays_on_first(page):
    page.apply_query({"status": "Resolved", "page": "9"})
    assert page.table.state.current_page == 1


def test_apply_query_keeps_search_text_as_typed(page):
    page.apply_query({"search": "Request 1 ", "status": " Pending "})
    view = page.view()
    assert view.filters["search"] == "Request 1 "
    assert view.filters["status"] == "Pending"
    assert view.total_filtered == 0


def test_loading_state_until_records_arrive():
    listing = ListingPage(COLUMNS, SPEC, page_size=20)
    assert listing.view().table.is_loading
    listing.load([])
    assert listing.view().table.is_empty

from __future__ import annotations

from src.hr_console.hr_console.core.enums import TableStatus
from src.hr_console.hr_console.tables.columns import text_column
from src.hr_console.hr_console.tables.controller import TableController


def _rows(ids):
    return [{"id": i, "name": f"Row {i}"} for i in ids]


class Events:
    def __init__(self):
        self.pages = []
        self.selections = []
        self.clicks = []


def _controller(page_size=20, **kwargs):
    events = Events()
    ctrl = TableController(
        [text_column("name", "Name")],
        page_size=page_size,
        selectable=True,
        on_page_change=events.pages.append,
        on_selection_change=events.selections.append,
        on_row_click=events.clicks.append,
        **kwargs,
    )
    return ctrl, events


def test_starts_loading_then_populated_or_empty():
    ctrl, _ = _controller()
    assert ctrl.status == TableStatus.LOADING
    assert ctrl.render().rows == []

    ctrl.set_data(_rows([1, 2]))
    assert ctrl.status == TableStatus.POPULATED

    ctrl.set_loading()
    assert ctrl.render().is_loading

    ctrl.set_data([])
    view = ctrl.render()
    assert view.is_empty
    assert view.empty_message == "No data available"


def test_toggle_select_all_twice_from_empty_is_identity():
    ctrl, events = _controller()
    ctrl.set_data(_rows([1, 2, 3]))

    assert ctrl.toggle_select_all() == frozenset({"1", "2", "3"})
    assert ctrl.is_all_selected
    assert ctrl.toggle_select_all() == frozenset()
    assert events.selections == [frozenset({"1", "2", "3"}), frozenset()]


def test_toggle_select_all_from_partial_selects_everything():
    ctrl, _ = _controller()
    ctrl.set_data(_rows([1, 2, 3]))
    ctrl.toggle_select_row(2)
    assert ctrl.is_partially_selected
    assert not ctrl.is_all_selected

    assert ctrl.toggle_select_all() == frozenset({"1", "2", "3"})
    assert not ctrl.is_partially_selected


def test_toggle_select_row_is_symmetric_difference():
    ctrl, _ = _controller()
    ctrl.set_data(_rows([1, 2]))
    assert ctrl.toggle_select_row(1) == frozenset({"1"})
    assert ctrl.toggle_select_row("1") == frozenset()


def test_toggle_select_row_ignores_ids_not_on_page():
    ctrl, events = _controller()
    ctrl.set_data(_rows([1, 2]))
    events.selections.clear()

    assert ctrl.toggle_select_row("999") == frozenset()
    assert ctrl.selected_ids == frozenset()
    assert not ctrl.is_partially_selected
    assert events.selections == []


def test_change_page_ignores_out_of_range_pages():
    ctrl, events = _controller(page_size=20)
    ctrl.set_data(_rows(range(20)), total_items=47, current_page=1)
    assert ctrl.total_pages == 3

    for bad in (0, -1, 4, "x"):
        assert ctrl.change_page(bad) is False
    assert ctrl.state.current_page == 1
    assert events.pages == []

    assert ctrl.change_page(3) is True
    assert ctrl.state.current_page == 3
    assert events.pages == [3]


def test_change_page_clears_selection():
    ctrl, events = _controller(page_size=2)
    ctrl.set_data(_rows([1, 2]), total_items=4)
    ctrl.toggle_select_all()

    ctrl.change_page(2)
    assert ctrl.selected_ids == frozenset()
    assert events.selections[-1] == frozenset()


def test_set_data_prunes_selection_to_new_rows():
    ctrl, events = _controller()
    ctrl.set_data(_rows([1, 2, 3]))
    ctrl.toggle_select_row(1)
    ctrl.toggle_select_row(3)

    ctrl.set_data(_rows([3, 4]))
    assert ctrl.selected_ids == frozenset({"3"})
    assert events.selections[-1] == frozenset({"3"})


def test_row_click_is_independent_of_selection():
    ctrl, events = _controller()
    rows = _rows([1])
    ctrl.set_data(rows)
    ctrl.toggle_select_row(1)

    ctrl.row_click(rows[0])
    assert events.clicks == [rows[0]]
    assert ctrl.selected_ids == frozenset({"1"})


def test_render_marks_selected_rows_and_pagination():
    ctrl, _ = _controller(page_size=20)
    ctrl.set_data(_rows(range(1, 21)), total_items=47, current_page=1)
    ctrl.toggle_select_row(5)

    view = ctrl.render()
    assert [r.id for r in view.rows if r.selected] == ["5"]
    assert view.rows[0].cells[0].text == "Row 1"
    assert view.pagination.total_pages == 3
    assert view.pagination.pages == [1, 2, 3]
    assert view.pagination.show
    assert not view.pagination.has_previous
    assert (view.pagination.first_item, view.pagination.last_item) == (1, 20)

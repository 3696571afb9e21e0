from __future__ import annotations

from datetime import datetime

from src.hr_console.hr_console.filters.pipeline import (
    DateRangeFilter,
    FilterSpec,
    RangeFilter,
    apply_filters,
    count_by,
    segment_counts,
)

SPEC = FilterSpec(
    search_fields=("subject", "employee.name"),
    exact_fields={"status": "status", "department": "department_name"},
    date_ranges=(DateRangeFilter("requested_on"),),
    amount_ranges=(RangeFilter("amount", "minAmount", "maxAmount"),),
    segment_field="status",
)

RECORDS = [
    {"id": 1, "subject": "Laptop broken", "employee": {"name": "Ann"}, "status": "Pending",
     "department_name": "HR", "requested_on": "2024-01-15T00:00:00", "amount": 100},
    {"id": 2, "subject": "Leave", "employee": {"name": "Bob"}, "status": "Resolved",
     "department_name": "Sales", "requested_on": "2024-01-15T23:59:59", "amount": "250.5"},
    {"id": 3, "subject": "Payslip", "employee": {"name": "Cara"}, "status": "Resolved",
     "department_name": "HR", "requested_on": datetime(2024, 1, 16, 0, 0), "amount": 0},
    {"id": 4, "subject": "Parking", "employee": {"name": "laptop Larry"}, "status": "Pending",
     "department_name": "Sales", "requested_on": "garbage", "amount": "n/a"},
]


def _ids(records):
    return [r["id"] for r in records]


def _run(**filters):
    state = SPEC.new_state()
    state.set_filters(filters)
    return _ids(apply_filters(RECORDS, SPEC, state))


def test_no_filters_keep_everything_in_order():
    assert _run() == [1, 2, 3, 4]


def test_search_is_case_insensitive_over_declared_fields():
    assert _run(search="LAPTOP") == [1, 4]


def test_search_term_is_matched_verbatim_including_spaces():
    assert _run(search="laptop ") == [1, 4]
    assert _run(search="broken ") == []
    assert _run(search=" ") == [1, 4]


def test_filters_are_and_combined():
    assert _run(status="Resolved") == [2, 3]
    assert _run(status="Resolved", department="HR") == [3]
    assert _run(status="Resolved", department="HR", search="leave") == []


def test_empty_filter_value_is_no_constraint():
    assert _run(status="", department=None) == [1, 2, 3, 4]


def test_date_range_is_inclusive_at_both_ends():
    assert _run(fromDate="2024-01-15", toDate="2024-01-15") == [1, 2]
    assert _run(fromDate="2024-01-16") == [3]
    assert _run(toDate="2024-01-15") == [1, 2]


def test_unparseable_bound_is_ignored():
    assert _run(fromDate="not-a-date") == [1, 2, 3, 4]


def test_unparseable_record_date_fails_active_bound():
    assert 4 not in _run(fromDate="2000-01-01")


def test_amount_range_is_inclusive():
    assert _run(minAmount="100", maxAmount="250.5") == [1, 2]
    assert _run(maxAmount="0") == [3]
    assert _run(minAmount="abc") == [1, 2, 3, 4]


def test_segment_filters_on_segment_field():
    assert _run(segment="Pending") == [1, 4]


def test_counts_come_from_unfiltered_collection():
    state = SPEC.new_state()
    state.set_filters({"department": "HR"})
    filtered = apply_filters(RECORDS, SPEC, state)
    assert len(filtered) == 2

    counts = segment_counts(RECORDS, SPEC, ["Pending", "Resolved", "Rejected"])
    assert counts == {"": 4, "Pending": 2, "Resolved": 2, "Rejected": 0}


def test_count_by_without_values_groups_everything():
    assert count_by(RECORDS, "department_name") == {"HR": 2, "Sales": 2}


def test_exact_match_compares_query_text_with_numbers():
    spec = FilterSpec(exact_fields={"createdBy": "createdBy"})
    state = spec.new_state()
    state.set_filters({"createdBy": "7"})
    assert _ids(apply_filters([{"id": 1, "createdBy": 7}, {"id": 2, "createdBy": 8}], spec, state)) == [1]

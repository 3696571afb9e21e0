from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.hr_console.hr_console.core.enums import PaymentMethod
from src.hr_console.hr_console.core.exceptions import ValidationError
from src.hr_console.hr_console.revenue.model import Revenue
from src.hr_console.hr_console.revenue.service import RevenueService, summarize


def _rev(rid, amount, *, category="Consulting", method=PaymentMethod.BANK, source="Invoice Payment",
         received_on=None, created_by=1, rate="0", company=None, client=None, email=None):
    return Revenue(
        revenue_id=rid,
        source=source,
        category=category,
        amount=Decimal(amount),
        payment_method=method,
        received_on=received_on or datetime(2024, 3, rid, 10, 0),
        created_by=created_by,
        created_by_name=f"User {created_by}",
        commission_rate=Decimal(rate),
        client_company=company,
        client_name=client,
        client_email=email,
    )


class FakeRevenueRepo:
    def __init__(self, items):
        self._items = list(items)

    def list_working_set(self, *, limit=1000):
        return self._items[:limit]

    def get(self, *, revenue_id):
        return next((r for r in self._items if r.revenue_id == int(revenue_id)), None)


def _sample():
    return [
        _rev(1, "12500.00", category="Software Development", rate="5", company="Acme Corp", email="john@acme.io"),
        _rev(2, "3200.50", method=PaymentMethod.CREDIT_CARD, rate="2.5", client="Mai Linh", created_by=2),
        _rev(3, "99.99", category="Subscription", method=PaymentMethod.ONLINE, source="Subscription Payment"),
        _rev(4, "0", category="Mystery", method=PaymentMethod.CASH, source="Product Sale", rate="10", created_by=2),
    ]


def _cells(view, row_index=0):
    return dict(zip([h.label for h in view.table.headers], view.table.rows[row_index].cells))


def test_columns_render_revenue_row():
    svc = RevenueService(FakeRevenueRepo(_sample()))
    view = svc.build_listing().view()
    cells = _cells(view, 0)

    assert cells["Amount"].text == "$12,500.00"
    assert cells["Category"].text == "SOFTWARE DEV"
    assert cells["Payment Method"].text == "BANK"
    assert cells["Received On"].text == "03/01/2024"
    assert cells["Client"].text == "Acme Corp"
    assert cells["Client"].initial == "A"
    assert cells["Client"].details == ("john@acme.io",)
    assert cells["Commission"].text == "$625.00"


def test_missing_client_and_unknown_category():
    svc = RevenueService(FakeRevenueRepo(_sample()))
    view = svc.build_listing().view()

    client_name_only = _cells(view, 1)
    assert client_name_only["Client"].text == "Mai Linh"

    no_client = _cells(view, 3)
    assert no_client["Client"].text == "No client"
    assert no_client["Client"].initial == "C"
    assert no_client["Category"].text == "MYSTERY"
    assert no_client["Amount"].text == "$0.00"
    assert no_client["Commission"].text == "$0.00"


def test_amount_and_date_filters():
    svc = RevenueService(FakeRevenueRepo(_sample()))
    listing = svc.build_listing({"minAmount": "100", "maxAmount": "12500"})
    assert [r["id"] for r in listing.filtered] == [1, 2]

    listing = svc.build_listing({"fromDate": "2024-03-02", "toDate": "2024-03-03"})
    assert [r["id"] for r in listing.filtered] == [2, 3]


def test_exact_filters_and_search():
    svc = RevenueService(FakeRevenueRepo(_sample()))
    assert [r["id"] for r in svc.build_listing({"paymentMethod": "cash"}).filtered] == [4]
    assert [r["id"] for r in svc.build_listing({"createdBy": "2"}).filtered] == [2, 4]
    assert [r["id"] for r in svc.build_listing({"search": "acme"}).filtered] == [1]


def test_summary_uses_dashboard_currency_style():
    summary = summarize([r.to_record() for r in _sample()])
    assert summary.count == 4
    assert summary.total_amount == pytest.approx(15800.49)
    assert summary.by_category["Consulting"] == 1
    assert summary.by_payment_method["bank"] == pytest.approx(12500.0)

    cards = {c.label: c.value for c in summary.cards()}
    assert cards["Total Revenue"] == "$15,800.49"
    assert cards["Transactions"] == "4"
    assert summarize([]).cards()[0].value == "$0"


def test_list_page_summary_ignores_active_filters():
    svc = RevenueService(FakeRevenueRepo(_sample()))
    unfiltered = svc.list_page({})
    data = svc.list_page({"category": "Consulting"})

    assert data["summary"] == unfiltered["summary"]
    assert data["summary"].count == 4
    assert data["summary"].total_amount == pytest.approx(15800.49)
    assert data["filtered_summary"].count == 1
    assert data["view"].total_unfiltered == 4
    assert data["creators"] == [(1, "User 1"), (2, "User 2")]


def test_get_missing_revenue_raises():
    svc = RevenueService(FakeRevenueRepo(_sample()))
    assert svc.get(3).source == "Subscription Payment"
    with pytest.raises(ValidationError):
        svc.get(10)

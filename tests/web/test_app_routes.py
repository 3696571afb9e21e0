from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.hr_console.hr_console.container import build_services
from src.hr_console.hr_console.core.enums import PaymentMethod, RequestPriority, RequestStatus
from src.hr_console.hr_console.main import create_app
from src.hr_console.hr_console.requests.model import EmployeeRequest
from src.hr_console.hr_console.revenue.model import Revenue


class InMemoryRequests:
    def __init__(self):
        self.items = {
            i: EmployeeRequest(
                request_id=i,
                emp_id=i,
                employee_name=f"Employee {i}",
                employee_email=None,
                department_name="HR" if i % 2 else "Sales",
                request_type="Leave",
                subject=f"Subject {i}",
                description="",
                priority=RequestPriority.MEDIUM,
                status=RequestStatus.RESOLVED if i <= 5 else RequestStatus.PENDING,
                requested_on=datetime(2024, 1, 1 + i % 28, 9, 0),
            )
            for i in range(1, 48)
        }
        self.status_calls = []

    def list_working_set(self, *, limit=1000):
        return list(self.items.values())[:limit]

    def get(self, *, request_id):
        return self.items.get(int(request_id))

    def update_status(self, *, request_ids, status):
        self.status_calls.append((list(request_ids), status))
        return len(request_ids)

    def assign(self, *, request_ids, assignee):
        return len(request_ids)

    def delete(self, *, request_ids):
        return len(request_ids)


class InMemoryRevenue:
    def __init__(self):
        self.items = [
            Revenue(
                revenue_id=1,
                source="Project Payment",
                category="Consulting",
                amount=Decimal("12500"),
                payment_method=PaymentMethod.BANK,
                received_on=datetime(2024, 3, 1, 10, 0),
                created_by=1,
                created_by_name="Pham Thi Dung",
            )
        ]

    def list_working_set(self, *, limit=1000):
        return self.items[:limit]

    def get(self, *, revenue_id):
        return next((r for r in self.items if r.revenue_id == int(revenue_id)), None)


@pytest.fixture
def repos():
    return InMemoryRequests(), InMemoryRevenue()


@pytest.fixture
def client(monkeypatch, repos):
    monkeypatch.setenv("APP_ENV", "testing")
    requests_repo, revenue_repo = repos
    app = create_app(build_services(requests_repo=requests_repo, revenue_repo=revenue_repo))
    return app.test_client()


def test_requests_page_renders_first_page(client):
    resp = client.get("/admin/requests")
    assert resp.status_code == 200
    html = resp.get_data(as_text=True)
    assert "Showing 1 to 20 of 47 results" in html
    assert "#1" in html


def test_requests_page_filters_from_query_string(client):
    html = client.get("/admin/requests?status=Resolved&page=2").get_data(as_text=True)
    assert "#5" in html
    assert "#6<" not in html
    assert "Showing" not in html


def test_bulk_status_change_redirects_with_flash(client, repos):
    resp = client.post(
        "/admin/requests/bulk?status=Pending",
        data={"action": "status", "selected_ids": ["6", "7"], "status": "Resolved"},
        follow_redirects=True,
    )
    assert resp.status_code == 200
    assert repos[0].status_calls == [([6, 7], RequestStatus.RESOLVED)]
    assert "Đã cập nhật trạng thái 2 yêu cầu" in resp.get_data(as_text=True)


def test_bulk_without_selection_flashes_error(client, repos):
    resp = client.post("/admin/requests/bulk", data={"action": "delete"}, follow_redirects=True)
    assert "Vui lòng chọn ít nhất 1 bản ghi" in resp.get_data(as_text=True)


def test_bulk_export_returns_excel(client):
    resp = client.post("/admin/requests/bulk", data={"action": "export", "selected_ids": ["1", "2"]})
    assert resp.status_code == 200
    assert resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert resp.data[:2] == b"PK"


def test_request_detail_and_missing_request(client):
    assert client.get("/admin/requests/3").status_code == 200
    resp = client.get("/admin/requests/999")
    assert resp.status_code == 302


def test_revenue_page_and_detail(client):
    html = client.get("/finance/revenue").get_data(as_text=True)
    assert "$12,500.00" in html
    assert "$12,500" in html
    assert client.get("/finance/revenue/1").status_code == 200
    assert client.get("/finance/revenue/2").status_code == 302

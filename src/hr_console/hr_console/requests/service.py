from __future__ import annotations

import io
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.export import rows_to_frame, to_excel_bytes
from ..common.validators import require_non_empty, require_selection
from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_WORKING_SET_LIMIT
from ..core.enums import RequestPriority, RequestStatus
from ..core.exceptions import ValidationError
from ..filters.listing import ListingPage
from ..filters.pipeline import count_by
from ..tables.renderer import CellRenderer
from .model import EmployeeRequest
from .repository import EmployeeRequestRepository
from .table_config import STATUS_TABS, build_columns, build_filter_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepartmentBreakdown:
    department_name: str
    total_requests: int
    pending_requests: int
    resolved_requests: int


@dataclass(frozen=True)
class RequestTypeBreakdown:
    request_type: str
    count: int
    resolution_rate: float


@dataclass(frozen=True)
class RequestStatistics:
    total_requests: int
    by_status: Mapping[str, int]
    by_priority: Mapping[str, int]
    avg_resolution_hours: Optional[float]
    department_breakdown: list[DepartmentBreakdown]
    request_type_breakdown: list[RequestTypeBreakdown]

    @property
    def pending_requests(self) -> int:
        return self.by_status.get(RequestStatus.PENDING.value, 0)

    @property
    def in_progress_requests(self) -> int:
        return self.by_status.get(RequestStatus.IN_PROGRESS.value, 0)

    @property
    def resolved_requests(self) -> int:
        return self.by_status.get(RequestStatus.RESOLVED.value, 0)

    @property
    def rejected_requests(self) -> int:
        return self.by_status.get(RequestStatus.REJECTED.value, 0)

    @property
    def cancelled_requests(self) -> int:
        return self.by_status.get(RequestStatus.CANCELLED.value, 0)


def compute_statistics(requests: Iterable[EmployeeRequest]) -> RequestStatistics:
    """Stat cards and breakdowns, always over the unfiltered working set."""
    items = list(requests)
    records = [r.to_record() for r in items]

    by_status = count_by(records, "status", [s.value for s in RequestStatus])
    by_priority = count_by(records, "priority", [p.value for p in RequestPriority])

    hours = [
        (r.resolved_on - r.requested_on).total_seconds() / 3600
        for r in items
        if r.status == RequestStatus.RESOLVED and r.resolved_on is not None
    ]
    avg_hours = round(sum(hours) / len(hours), 1) if hours else None

    dept: dict[str, dict[str, int]] = defaultdict(lambda: {"total": 0, "pending": 0, "resolved": 0})
    types: dict[str, dict[str, int]] = defaultdict(lambda: {"count": 0, "resolved": 0})
    for r in items:
        d = dept[r.department_name or "N/A"]
        d["total"] += 1
        if r.status == RequestStatus.PENDING:
            d["pending"] += 1
        t = types[r.request_type]
        t["count"] += 1
        if r.status == RequestStatus.RESOLVED:
            d["resolved"] += 1
            t["resolved"] += 1

    department_breakdown = [
        DepartmentBreakdown(name, v["total"], v["pending"], v["resolved"])
        for name, v in sorted(dept.items(), key=lambda kv: (-kv[1]["total"], kv[0]))
    ]
    request_type_breakdown = [
        RequestTypeBreakdown(name, v["count"], round(v["resolved"] * 100 / v["count"], 1))
        for name, v in sorted(types.items(), key=lambda kv: (-kv[1]["count"], kv[0]))
    ]

    return RequestStatistics(
        total_requests=len(items),
        by_status=by_status,
        by_priority=by_priority,
        avg_resolution_hours=avg_hours,
        department_breakdown=department_breakdown,
        request_type_breakdown=request_type_breakdown,
    )


class EmployeeRequestService:
    def __init__(
        self,
        requests: EmployeeRequestRepository,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        working_set_limit: int = DEFAULT_WORKING_SET_LIMIT,
        renderer: Optional[CellRenderer] = None,
    ):
        self._requests = requests
        self._page_size = page_size
        self._limit = working_set_limit
        self._renderer = renderer or CellRenderer()
        self._columns = build_columns()

    @property
    def columns(self):
        return list(self._columns)

    def working_set(self) -> list[EmployeeRequest]:
        return list(self._requests.list_working_set(limit=self._limit))

    def build_listing(self, query: Optional[Mapping[str, Any]] = None, *, requests: Optional[Sequence[EmployeeRequest]] = None) -> ListingPage:
        items = self.working_set() if requests is None else list(requests)
        page = ListingPage(
            self._columns,
            build_filter_spec(),
            records=[r.to_record() for r in items],
            segments=STATUS_TABS,
            page_size=self._page_size,
            selectable=True,
            renderer=self._renderer,
            empty_message="Không có yêu cầu nào",
        )
        if query:
            page.apply_query(query)
        return page

    def list_page(self, query: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        items = self.working_set()
        listing = self.build_listing(query, requests=items)
        return {
            "listing": listing,
            "view": listing.view(),
            "stats": compute_statistics(items),
        }

    def get(self, request_id: int) -> EmployeeRequest:
        found = self._requests.get(request_id=int(request_id))
        if not found:
            raise ValidationError("Không tìm thấy yêu cầu")
        return found

    # -------- bulk actions --------
    @staticmethod
    def _ids(selected_ids: Iterable[Any]) -> list[int]:
        try:
            return [int(i) for i in require_selection(selected_ids)]
        except ValueError:
            raise ValidationError("Mã yêu cầu không hợp lệ")

    def bulk_update_status(self, *, selected_ids: Iterable[Any], status: str) -> int:
        ids = self._ids(selected_ids)
        try:
            new_status = RequestStatus(str(status or "").strip())
        except ValueError:
            raise ValidationError("Trạng thái không hợp lệ")
        n = self._requests.update_status(request_ids=ids, status=new_status)
        logger.info("Bulk status change to %s: %d/%d requests", new_status.value, n, len(ids))
        return n

    def bulk_assign(self, *, selected_ids: Iterable[Any], assignee: str) -> int:
        ids = self._ids(selected_ids)
        name = require_non_empty(assignee, "Người xử lý")
        n = self._requests.assign(request_ids=ids, assignee=name)
        logger.info("Bulk assign to %s: %d/%d requests", name, n, len(ids))
        return n

    def bulk_delete(self, *, selected_ids: Iterable[Any]) -> int:
        ids = self._ids(selected_ids)
        n = self._requests.delete(request_ids=ids)
        logger.info("Bulk delete: %d/%d requests", n, len(ids))
        return n

    def export_selected(self, *, selected_ids: Iterable[Any]) -> io.BytesIO:
        ids = set(self._ids(selected_ids))
        records = [r.to_record() for r in self.working_set() if r.request_id in ids]
        if not records:
            raise ValidationError("Không tìm thấy yêu cầu để xuất")
        df = rows_to_frame(self._columns, records, renderer=self._renderer)
        return to_excel_bytes(df, sheet_name="YeuCau")

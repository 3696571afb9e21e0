from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..core.constants import DEFAULT_PAGE_SIZE, DEFAULT_WORKING_SET_LIMIT
from ..core.enums import PaymentMethod
from ..core.exceptions import ValidationError
from ..filters.listing import ListingPage
from ..filters.pipeline import count_by
from ..tables.cells import format_amount
from ..tables.renderer import CellRenderer
from .model import Revenue
from .repository import RevenueRepository
from .table_config import CATEGORIES, build_columns, build_filter_spec


@dataclass(frozen=True)
class SummaryCard:
    label: str
    value: str


@dataclass(frozen=True)
class RevenueSummary:
    count: int
    total_amount: float
    average_amount: float
    by_category: Mapping[str, int]
    by_payment_method: Mapping[str, float]

    def cards(self) -> list[SummaryCard]:
        """Thẻ tổng hợp (định dạng tiền kiểu dashboard)."""
        return [
            SummaryCard("Total Revenue", format_amount(self.total_amount)),
            SummaryCard("Transactions", str(self.count)),
            SummaryCard("Average Amount", format_amount(self.average_amount)),
        ]


def summarize(records: Iterable[Mapping[str, Any]]) -> RevenueSummary:
    items = list(records)
    total = sum(float(r.get("amount") or 0) for r in items)
    by_method = {m.value: 0.0 for m in PaymentMethod}
    for r in items:
        method = str(r.get("paymentMethod") or "")
        by_method[method] = by_method.get(method, 0.0) + float(r.get("amount") or 0)
    return RevenueSummary(
        count=len(items),
        total_amount=total,
        average_amount=total / len(items) if items else 0.0,
        by_category=count_by(items, "category", CATEGORIES),
        by_payment_method=by_method,
    )


class RevenueService:
    def __init__(
        self,
        revenues: RevenueRepository,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        working_set_limit: int = DEFAULT_WORKING_SET_LIMIT,
        renderer: Optional[CellRenderer] = None,
    ):
        self._revenues = revenues
        self._page_size = page_size
        self._limit = working_set_limit
        self._renderer = renderer or CellRenderer()
        self._columns = build_columns()

    def working_set(self) -> list[Revenue]:
        return list(self._revenues.list_working_set(limit=self._limit))

    def build_listing(self, query: Optional[Mapping[str, Any]] = None, *, revenues: Optional[Sequence[Revenue]] = None) -> ListingPage:
        items = self.working_set() if revenues is None else list(revenues)
        page = ListingPage(
            self._columns,
            build_filter_spec(),
            records=[r.to_record() for r in items],
            page_size=self._page_size,
            renderer=self._renderer,
            empty_message="No revenue records found",
        )
        if query:
            page.apply_query(query)
        return page

    def list_page(self, query: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
        items = self.working_set()
        listing = self.build_listing(query, revenues=items)
        creators = sorted({(r.created_by, r.created_by_name or str(r.created_by)) for r in items}, key=lambda x: x[1])
        return {
            "listing": listing,
            "view": listing.view(),
            "summary": summarize(r.to_record() for r in items),
            "filtered_summary": summarize(listing.filtered),
            "creators": creators,
        }

    def get(self, revenue_id: int) -> Revenue:
        found = self._revenues.get(revenue_id=int(revenue_id))
        if not found:
            raise ValidationError("Không tìm thấy khoản doanh thu")
        return found

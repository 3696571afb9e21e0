from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..core.enums import PaymentMethod


@dataclass(frozen=True)
class Revenue:
    """Thực thể miền (domain): Một khoản doanh thu đã nhận."""

    revenue_id: int
    source: str
    category: str
    amount: Decimal
    payment_method: PaymentMethod
    received_on: datetime
    created_by: int
    created_by_name: Optional[str] = None
    commission_rate: Decimal = Decimal("0")
    related_invoice_id: Optional[int] = None
    client_company: Optional[str] = None
    client_name: Optional[str] = None
    client_email: Optional[str] = None

    @property
    def client_display_name(self) -> str:
        return self.client_company or self.client_name or ""

    def to_record(self) -> dict[str, Any]:
        """Read-model phục vụ bảng; ``client`` là trường tổng hợp."""
        client = None
        if self.client_display_name:
            client = {"name": self.client_display_name, "email": self.client_email or ""}
        return {
            "id": self.revenue_id,
            "source": self.source,
            "category": self.category,
            "amount": float(self.amount),
            "paymentMethod": self.payment_method.value,
            "receivedOn": self.received_on,
            "createdBy": self.created_by,
            "createdByName": self.created_by_name or "",
            "commissionRate": float(self.commission_rate),
            "relatedInvoiceId": self.related_invoice_id,
            "client": client,
            "client_name": self.client_display_name,
        }

from __future__ import annotations

from enum import Enum


class DisplayKind(str, Enum):
    """Tag chọn chiến lược hiển thị của một ô."""

    TEXT = "text"
    BADGE = "badge"
    DATE = "date"
    CURRENCY = "currency"
    AVATAR = "avatar"
    NESTED_SUMMARY = "nested-summary"
    COMPUTED = "computed"
    CUSTOM = "custom"


class TableStatus(str, Enum):
    """Trạng thái hiển thị của bảng (không có trạng thái lỗi)."""

    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"


class RequestStatus(str, Enum):
    """Trạng thái xử lý yêu cầu của nhân viên."""

    PENDING = "Pending"
    IN_PROGRESS = "In_Progress"
    RESOLVED = "Resolved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


class RequestPriority(str, Enum):
    URGENT = "Urgent"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class PaymentMethod(str, Enum):
    BANK = "bank"
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    ONLINE = "online"

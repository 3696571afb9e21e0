from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import RequestPriority, RequestStatus


@dataclass(frozen=True)
class EmployeeRequest:
    """Thực thể miền (domain): Yêu cầu của nhân viên gửi HR."""

    request_id: int
    emp_id: int
    employee_name: str
    employee_email: Optional[str]
    department_name: Optional[str]
    request_type: str
    subject: str
    description: str
    priority: RequestPriority
    status: RequestStatus
    requested_on: datetime
    assigned_to_name: Optional[str] = None
    resolved_on: Optional[datetime] = None

    def to_record(self) -> dict[str, Any]:
        """Read-model phục vụ bảng (id + các trường hiển thị)."""
        return {
            "id": self.request_id,
            "request_id": self.request_id,
            "emp_id": self.emp_id,
            "employee_name": self.employee_name,
            "employee_email": self.employee_email or "",
            "employee": {"name": self.employee_name, "email": self.employee_email or ""},
            "department_name": self.department_name or "",
            "request_type": self.request_type,
            "subject": self.subject,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "assigned_to_name": self.assigned_to_name or "",
            "requested_on": self.requested_on,
            "resolved_on": self.resolved_on,
        }

from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import RequestPriority, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import EmployeeRequest
from .repository import EmployeeRequestRepository

_SELECT = """
    SELECT r.request_id, r.emp_id, e.full_name AS employee_name, e.email AS employee_email,
           d.dept_name AS department_name, r.request_type, r.subject, r.description,
           r.priority, r.status, r.assigned_to_name, r.requested_on, r.resolved_on
    FROM employee_requests r
    JOIN employees e ON e.emp_id = r.emp_id
    LEFT JOIN departments d ON d.dept_id = e.dept_id
"""


def _to_model(r: dict) -> EmployeeRequest:
    return EmployeeRequest(
        request_id=int(r["request_id"]),
        emp_id=int(r["emp_id"]),
        employee_name=r["employee_name"],
        employee_email=r.get("employee_email"),
        department_name=r.get("department_name"),
        request_type=r["request_type"],
        subject=r.get("subject") or "",
        description=r.get("description") or "",
        priority=RequestPriority(r["priority"]),
        status=RequestStatus(r["status"]),
        requested_on=r["requested_on"],
        assigned_to_name=r.get("assigned_to_name"),
        resolved_on=r.get("resolved_on"),
    )


class MySQLEmployeeRequestRepository(EmployeeRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_working_set(self, *, limit: int = 1000) -> Sequence[EmployeeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                ORDER BY r.requested_on DESC, r.request_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def get(self, *, request_id: int) -> Optional[EmployeeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE r.request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def update_status(self, *, request_ids: Sequence[int], status: RequestStatus) -> int:
        ids = [int(i) for i in request_ids]
        resolved_expr = "NOW()" if status == RequestStatus.RESOLVED else "NULL"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE employee_requests
                SET status=%s, resolved_on={resolved_expr}
                WHERE request_id IN ({in_clause(ids)})
                """,
                (status.value, *ids),
            )
            return int(cur.rowcount)

    def assign(self, *, request_ids: Sequence[int], assignee: str) -> int:
        ids = [int(i) for i in request_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE employee_requests SET assigned_to_name=%s WHERE request_id IN ({in_clause(ids)})",
                (assignee, *ids),
            )
            return int(cur.rowcount)

    def delete(self, *, request_ids: Sequence[int]) -> int:
        ids = [int(i) for i in request_ids]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM employee_requests WHERE request_id IN ({in_clause(ids)})", tuple(ids))
            return int(cur.rowcount)

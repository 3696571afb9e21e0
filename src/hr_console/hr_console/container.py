from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_DATE_FORMAT, DEFAULT_PAGE_SIZE, DEFAULT_WORKING_SET_LIMIT
from .database.connection import DBConfig, DatabaseConnection
from .requests.mysql_request_repository import MySQLEmployeeRequestRepository
from .requests.repository import EmployeeRequestRepository
from .requests.service import EmployeeRequestService
from .revenue.mysql_revenue_repository import MySQLRevenueRepository
from .revenue.repository import RevenueRepository
from .revenue.service import RevenueService
from .tables.renderer import CellRenderer


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection | None

    requests_repo: EmployeeRequestRepository
    revenue_repo: RevenueRepository

    renderer: CellRenderer
    request_service: EmployeeRequestService
    revenue_service: RevenueService


def build_services(
    *,
    requests_repo: EmployeeRequestRepository,
    revenue_repo: RevenueRepository,
    conn: DatabaseConnection | None = None,
    page_size: int = DEFAULT_PAGE_SIZE,
    working_set_limit: int = DEFAULT_WORKING_SET_LIMIT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Container:
    """Wire services over any repositories (MySQL in the app, fakes in tests)."""
    renderer = CellRenderer(date_format=date_format)
    request_service = EmployeeRequestService(
        requests_repo,
        page_size=page_size,
        working_set_limit=working_set_limit,
        renderer=renderer,
    )
    revenue_service = RevenueService(
        revenue_repo,
        page_size=page_size,
        working_set_limit=working_set_limit,
        renderer=renderer,
    )
    return Container(
        conn=conn,
        requests_repo=requests_repo,
        revenue_repo=revenue_repo,
        renderer=renderer,
        request_service=request_service,
        revenue_service=revenue_service,
    )


def build_container(
    *,
    db_config: dict,
    page_size: int = DEFAULT_PAGE_SIZE,
    working_set_limit: int = DEFAULT_WORKING_SET_LIMIT,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return build_services(
        requests_repo=MySQLEmployeeRequestRepository(conn),
        revenue_repo=MySQLRevenueRepository(conn),
        conn=conn,
        page_size=page_size,
        working_set_limit=working_set_limit,
        date_format=date_format,
    )

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Revenue
from .repository import RevenueRepository

_SELECT = """
    SELECT rv.revenue_id, rv.source, rv.category, rv.amount, rv.payment_method, rv.received_on,
           rv.created_by, u.full_name AS created_by_name, rv.commission_rate, rv.related_invoice_id,
           c.company_name AS client_company, c.client_name, c.email AS client_email
    FROM revenues rv
    LEFT JOIN employees u ON u.emp_id = rv.created_by
    LEFT JOIN clients c ON c.client_id = rv.received_from
"""


def _to_model(r: dict) -> Revenue:
    return Revenue(
        revenue_id=int(r["revenue_id"]),
        source=r["source"],
        category=r["category"],
        amount=Decimal(str(r["amount"])),
        payment_method=PaymentMethod(r["payment_method"]),
        received_on=r["received_on"],
        created_by=int(r["created_by"]),
        created_by_name=r.get("created_by_name"),
        commission_rate=Decimal(str(r.get("commission_rate") or 0)),
        related_invoice_id=int(r["related_invoice_id"]) if r.get("related_invoice_id") else None,
        client_company=r.get("client_company"),
        client_name=r.get("client_name"),
        client_email=r.get("client_email"),
    )


class MySQLRevenueRepository(RevenueRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_working_set(self, *, limit: int = 1000) -> Sequence[Revenue]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                ORDER BY rv.received_on DESC, rv.revenue_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [_to_model(r) for r in fetchall(cur)]

    def get(self, *, revenue_id: int) -> Optional[Revenue]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE rv.revenue_id=%s", (int(revenue_id),))
            r = fetchone(cur)
            return _to_model(r) if r else None

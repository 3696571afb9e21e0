from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import PaymentMethod
from ..core.exceptions import ValidationError
from ..container import Container
from .table_config import CATEGORIES, SOURCES


def register(app: Flask, container: Container) -> None:
    service = container.revenue_service

    @app.route("/finance/revenue", methods=["GET"], endpoint="finance_revenue")
    def finance_revenue():
        try:
            data = service.list_page(request.args)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("finance_revenue"))
        return render_template(
            "finance/revenue.html",
            listing=data["listing"],
            view=data["view"],
            summary=data["summary"],
            creators=data["creators"],
            categories=CATEGORIES,
            sources=SOURCES,
            payment_methods=[m.value for m in PaymentMethod],
            active_page="finance_revenue",
        )

    @app.route("/finance/revenue/<int:revenue_id>", methods=["GET"], endpoint="finance_revenue_detail")
    def finance_revenue_detail(revenue_id: int):
        try:
            item = service.get(revenue_id)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("finance_revenue"))
        return render_template("finance/revenue_detail.html", item=item, active_page="finance_revenue")

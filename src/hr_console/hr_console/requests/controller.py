from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.export import XLSX_MIMETYPE
from ..core.enums import RequestPriority, RequestStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .table_config import STATUS_BADGES

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.request_service

    @app.route("/admin/requests", methods=["GET"], endpoint="admin_requests")
    def admin_requests():
        try:
            data = service.list_page(request.args)
        except ValidationError as e:
            flash(str(e), "danger")
            return redirect(url_for("admin_requests"))
        return render_template(
            "admin/requests.html",
            listing=data["listing"],
            view=data["view"],
            stats=data["stats"],
            status_badges=STATUS_BADGES,
            statuses=[s.value for s in RequestStatus],
            priorities=[p.value for p in RequestPriority],
            active_page="admin_requests",
        )

    @app.route("/admin/requests/<int:request_id>", methods=["GET"], endpoint="admin_request_detail")
    def admin_request_detail(request_id: int):
        try:
            item = service.get(request_id)
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("admin_requests"))
        return render_template(
            "admin/request_detail.html",
            item=item,
            status_badges=STATUS_BADGES,
            active_page="admin_requests",
        )

    @app.route("/admin/requests/bulk", methods=["POST"], endpoint="admin_requests_bulk")
    def admin_requests_bulk():
        action = (request.form.get("action") or "").strip()
        selected_ids = request.form.getlist("selected_ids")
        back = url_for("admin_requests", **request.args)
        try:
            if action == "status":
                n = service.bulk_update_status(selected_ids=selected_ids, status=request.form.get("status", ""))
                flash(f"Đã cập nhật trạng thái {n} yêu cầu", "success")
            elif action == "assign":
                n = service.bulk_assign(selected_ids=selected_ids, assignee=request.form.get("assignee", ""))
                flash(f"Đã phân công {n} yêu cầu", "success")
            elif action == "delete":
                n = service.bulk_delete(selected_ids=selected_ids)
                flash(f"Đã xóa {n} yêu cầu", "info")
            elif action == "export":
                output = service.export_selected(selected_ids=selected_ids)
                return send_file(
                    output,
                    download_name="employee_requests.xlsx",
                    as_attachment=True,
                    mimetype=XLSX_MIMETYPE,
                )
            else:
                flash("Hành động không hợp lệ.", "danger")
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Bulk action %r failed", action)
            flash("Lỗi hệ thống khi xử lý yêu cầu", "danger")
        return redirect(back)

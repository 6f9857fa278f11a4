from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_utc
from ..common.http import current_uid, json_errors, login_required, ok, payload
from ..container import Container
from .service import summarize


def register(app: Flask, container: Container) -> None:
    def _service():
        return container.tenant(current_uid()).attendance_service

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    @json_errors
    def attendance_today():
        now = now_utc()
        svc = _service()
        rows = svc.day_sheet(now=now)
        return ok(date=svc.today(now), rows=rows, summary=summarize(rows))

    @app.route("/api/attendance/<staff_id>", methods=["PUT"], endpoint="attendance_mark")
    @login_required
    @json_errors
    def attendance_mark(staff_id: str):
        svc = _service()
        svc.mark(staff_id, payload().get("status", ""), now=now_utc())
        return ok(staff_id=staff_id)

from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_utc
from ..common.http import current_uid, fail, json_errors, login_required
from ..container import Container
from .export import ExportFile


def register(app: Flask, container: Container) -> None:
    def _send(export: ExportFile):
        return app.response_class(
            export.encoded(),
            mimetype=export.mimetype,
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )

    @app.route("/api/reports/<name>.csv", methods=["GET"], endpoint="report_csv")
    @login_required
    @json_errors
    def report_csv(name: str):
        reports = container.tenant(current_uid()).report_service
        builders = {
            "licenses": reports.licenses_export,
            "leave-balances": reports.leave_balances_export,
            "leave-records": reports.leave_records_export,
            "attendance": reports.attendance_export,
            "staff": reports.staff_export,
        }
        builder = builders.get(name)
        if builder is None:
            return fail(f"Unknown report: {name}", 404)
        return _send(builder(now=now_utc()))

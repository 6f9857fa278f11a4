from __future__ import annotations

from flask import Flask, request

from ..common.http import current_uid, json_errors, login_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _service():
        return container.tenant(current_uid()).leave_service

    @app.route("/api/leave", methods=["GET"], endpoint="leave_records")
    @login_required
    @json_errors
    def leave_records():
        svc = _service()
        return ok(records=svc.list_records(staff_id=request.args.get("staff_id") or None))

    @app.route("/api/leave", methods=["POST"], endpoint="leave_add")
    @login_required
    @json_errors
    def leave_add():
        data = payload()
        record_id = _service().record_leave(
            staff_id=data.get("staff_id") or data.get("staffId", ""),
            leave_type=data.get("leave_type") or data.get("leaveType", ""),
            start_date=data.get("start_date") or data.get("startDate"),
            end_date=data.get("end_date") or data.get("endDate"),
            reason=data.get("reason", ""),
        )
        return ok(record_id=record_id), 201

    @app.route("/api/leave/balances", methods=["GET"], endpoint="leave_balances")
    @login_required
    @json_errors
    def leave_balances():
        svc = _service()
        return ok(balances=svc.balances(), orphaned=svc.orphaned())

from __future__ import annotations

from flask import Flask

from ..common.http import confirmed, current_uid, json_errors, login_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _service():
        return container.tenant(current_uid()).staff_service

    @app.route("/api/staff", methods=["GET"], endpoint="staff_list")
    @login_required
    @json_errors
    def staff_list():
        svc = _service()
        return ok(staff=svc.list_staff(), stores=svc.stores)

    @app.route("/api/staff", methods=["POST"], endpoint="staff_add")
    @login_required
    @json_errors
    def staff_add():
        data = payload()
        staff_id = _service().add_staff(
            name=data.get("name", ""),
            store=data.get("store", ""),
            total_cl=data.get("total_cl", data.get("totalCL")),
            total_sl=data.get("total_sl", data.get("totalSL")),
            total_el=data.get("total_el", data.get("totalEL")),
        )
        return ok(staff_id=staff_id), 201

    @app.route("/api/staff/<staff_id>", methods=["PATCH"], endpoint="staff_update")
    @login_required
    @json_errors
    def staff_update(staff_id: str):
        data = payload()
        _service().update_staff(
            staff_id,
            name=data.get("name"),
            store=data.get("store"),
            total_cl=data.get("total_cl", data.get("totalCL")),
            total_sl=data.get("total_sl", data.get("totalSL")),
            total_el=data.get("total_el", data.get("totalEL")),
        )
        return ok(staff_id=staff_id)

    @app.route("/api/staff/<staff_id>", methods=["DELETE"], endpoint="staff_delete")
    @login_required
    @json_errors
    def staff_delete(staff_id: str):
        _service().delete_staff(staff_id, confirmed=confirmed())
        return ok(staff_id=staff_id)

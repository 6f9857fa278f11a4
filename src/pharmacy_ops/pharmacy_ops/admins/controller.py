from __future__ import annotations

from flask import Flask

from ..common.http import confirmed, current_uid, json_errors, login_required, ok, payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _service():
        return container.tenant(current_uid()).admin_service

    @app.route("/api/admins", methods=["GET"], endpoint="admins")
    @login_required
    @json_errors
    def admins():
        return ok(admins=_service().list_admins())

    @app.route("/api/admins", methods=["POST"], endpoint="admin_add")
    @login_required
    @json_errors
    def admin_add():
        data = payload()
        admin_id = _service().add_admin(
            name=data.get("name", ""),
            email=data.get("email", ""),
            mobile=data.get("mobile", ""),
            designation=data.get("designation", ""),
        )
        return ok(admin_id=admin_id), 201

    @app.route("/api/admins/<admin_id>", methods=["PATCH"], endpoint="admin_update")
    @login_required
    @json_errors
    def admin_update(admin_id: str):
        data = payload()
        _service().update_admin(
            admin_id,
            name=data.get("name"),
            email=data.get("email"),
            mobile=data.get("mobile"),
            designation=data.get("designation"),
        )
        return ok(admin_id=admin_id)

    @app.route("/api/admins/<admin_id>", methods=["DELETE"], endpoint="admin_delete")
    @login_required
    @json_errors
    def admin_delete(admin_id: str):
        _service().delete_admin(admin_id, confirmed=confirmed())
        return ok(admin_id=admin_id)

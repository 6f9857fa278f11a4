from __future__ import annotations

from typing import Optional

from flask import Flask, request

from ..common.datetime_utils import now_utc
from ..common.http import confirmed, current_uid, json_errors, login_required, ok, payload
from ..container import Container
from .model import Attachment


def _attachment() -> Optional[Attachment]:
    f = request.files.get("file")
    if not f or not f.filename:
        return None
    return Attachment(file_name=f.filename, data=f.read(), content_type=f.mimetype)


def register(app: Flask, container: Container) -> None:
    def _service():
        return container.tenant(current_uid()).license_service

    @app.route("/api/licenses", methods=["GET"], endpoint="licenses")
    @login_required
    @json_errors
    def licenses():
        listing = _service().list_licenses(search=request.args.get("q", ""))
        return ok(licenses=listing.licenses, empty_message=listing.empty_message)

    @app.route("/api/licenses/alerts", methods=["GET"], endpoint="license_alerts")
    @login_required
    @json_errors
    def license_alerts():
        return ok(alerts=_service().alerts(now_utc()))

    @app.route("/api/licenses", methods=["POST"], endpoint="license_add")
    @login_required
    @json_errors
    def license_add():
        data = payload()
        license_id = _service().add_license(
            name=data.get("name", ""),
            expiry_date=data.get("expiry_date") or data.get("expiryDate"),
            license_number=data.get("license_number") or data.get("licenseNumber", ""),
            issuing_authority=data.get("issuing_authority") or data.get("issuingAuthority", ""),
            notes=data.get("notes", ""),
            attachment=_attachment(),
        )
        return ok(license_id=license_id), 201

    @app.route("/api/licenses/<license_id>/renew", methods=["POST"], endpoint="license_renew")
    @login_required
    @json_errors
    def license_renew(license_id: str):
        data = payload()
        _service().renew_license(
            license_id=license_id,
            expiry_date=data.get("expiry_date") or data.get("expiryDate"),
            notes=data.get("notes"),
            attachment=_attachment(),
        )
        return ok(license_id=license_id)

    @app.route("/api/licenses/<license_id>", methods=["DELETE"], endpoint="license_delete")
    @login_required
    @json_errors
    def license_delete(license_id: str):
        _service().delete_license(license_id, confirmed=confirmed())
        return ok(license_id=license_id)

from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_utc
from ..common.http import current_uid, json_errors, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    @json_errors
    def dashboard():
        uid = current_uid()
        live = container.sessions.get(uid) or container.sessions.open(uid)
        return ok(dashboard=live.view(now_utc()))

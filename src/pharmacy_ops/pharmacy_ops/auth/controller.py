from __future__ import annotations

from flask import Flask, session

from ..common.http import current_uid, json_errors, login_required, ok, payload
from ..container import Container
from .service import AuthService


def register(app: Flask, container: Container) -> None:
    auth = AuthService(container.identity)

    def _start_session(user) -> None:
        session.clear()
        session["uid"] = user.uid
        session["email"] = user.email

    @app.route("/auth/sign-up", methods=["POST"], endpoint="sign_up")
    @json_errors
    def sign_up():
        data = payload()
        user = auth.sign_up(data.get("email", ""), data.get("password", ""))
        _start_session(user)
        return ok(user=user), 201

    @app.route("/auth/sign-in", methods=["POST"], endpoint="sign_in")
    @json_errors
    def sign_in():
        data = payload()
        user = auth.sign_in(data.get("email", ""), data.get("password", ""))
        _start_session(user)
        return ok(user=user)

    @app.route("/auth/sign-out", methods=["POST"], endpoint="sign_out")
    @login_required
    @json_errors
    def sign_out():
        auth.sign_out(current_uid())
        session.clear()
        return ok(message="Signed out")

    @app.route("/auth/password-reset", methods=["POST"], endpoint="password_reset")
    @json_errors
    def password_reset():
        auth.request_password_reset(payload().get("email", ""))
        return ok(message="Password reset email sent! Please check your inbox.")

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(user={"uid": session["uid"], "email": session.get("email", "")})

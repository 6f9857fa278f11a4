from __future__ import annotations

import logging
from typing import Callable, List, Optional

import requests

from ..common.validators import require_email
from ..core.exceptions import AuthenticationError, BackendError, ValidationError
from .store import AuthStateCallback, AuthUser

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1/accounts"

# Provider error codes -> (exception type, user-visible message)
_ERRORS = {
    "EMAIL_EXISTS": (ValidationError, "An account with this email already exists"),
    "INVALID_EMAIL": (ValidationError, "Email is not a valid email address"),
    "WEAK_PASSWORD": (ValidationError, "Password should be at least 6 characters"),
    "MISSING_PASSWORD": (ValidationError, "Password is required"),
    "EMAIL_NOT_FOUND": (AuthenticationError, "Invalid email or password"),
    "INVALID_PASSWORD": (AuthenticationError, "Invalid email or password"),
    "INVALID_LOGIN_CREDENTIALS": (AuthenticationError, "Invalid email or password"),
    "USER_DISABLED": (AuthenticationError, "This account has been disabled"),
    "TOO_MANY_ATTEMPTS_TRY_LATER": (BackendError, "Too many attempts. Please try again later."),
}


class IdentityToolkitProvider:
    """Email/password accounts over the Identity Toolkit REST API.

    Sign-out is local: no server call is made, the registered listeners are
    told that ``uid`` signed out.
    """

    def __init__(self, api_key: str, *, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self._api_key = api_key
        self._timeout = timeout
        self._http = session or requests.Session()
        self._listeners: List[AuthStateCallback] = []

    def _post(self, action: str, payload: dict) -> dict:
        if not self._api_key:
            raise BackendError("Authentication is not configured (missing web API key)")

        try:
            response = self._http.post(
                f"{IDENTITY_TOOLKIT_URL}:{action}",
                params={"key": self._api_key},
                json=payload,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.exception("Identity provider unreachable (%s)", action)
            raise BackendError("Could not reach the authentication service. Please try again.") from e

        if response.ok:
            return response.json()

        try:
            message = response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            message = ""
        code = message.split(":", 1)[0].strip()
        exc_type, text = _ERRORS.get(code, (BackendError, "Authentication failed. Please try again."))
        logger.warning("Identity provider rejected %s: %s", action, code or response.status_code)
        raise exc_type(text)

    def _emit(self, uid: str, user: Optional[AuthUser]) -> None:
        for callback in list(self._listeners):
            callback(uid, user)

    def _user(self, body: dict) -> AuthUser:
        return AuthUser(
            uid=body["localId"],
            email=body.get("email", ""),
            id_token=body.get("idToken"),
            refresh_token=body.get("refreshToken"),
        )

    def sign_up(self, email: str, password: str) -> AuthUser:
        body = self._post("signUp", {"email": email, "password": password, "returnSecureToken": True})
        user = self._user(body)
        self._emit(user.uid, user)
        return user

    def sign_in(self, email: str, password: str) -> AuthUser:
        body = self._post("signInWithPassword", {"email": email, "password": password, "returnSecureToken": True})
        user = self._user(body)
        self._emit(user.uid, user)
        return user

    def sign_out(self, uid: str) -> None:
        self._emit(uid, None)

    def send_password_reset(self, email: str) -> None:
        email = require_email(email)
        self._post("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        self._listeners.append(callback)

        def _remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _remove

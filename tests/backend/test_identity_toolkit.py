from __future__ import annotations

import pytest
import requests

from src.pharmacy_ops.pharmacy_ops.backend.identity_toolkit import IdentityToolkitProvider
from src.pharmacy_ops.pharmacy_ops.core.exceptions import AuthenticationError, BackendError, ValidationError


class FakeResponse:
    def __init__(self, status_code: int, body):
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeSession:
    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls = []

    def post(self, url, params=None, json=None, timeout=None):
        self.calls.append({"url": url, "params": params, "json": json, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _error(message: str) -> FakeResponse:
    return FakeResponse(400, {"error": {"code": 400, "message": message}})


def test_sign_in_posts_credentials_and_notifies_listeners():
    http = FakeSession(FakeResponse(200, {"localId": "u1", "email": "a@b.co", "idToken": "t", "refreshToken": "r"}))
    provider = IdentityToolkitProvider("key-1", session=http)
    events = []
    provider.on_auth_state_change(lambda uid, user: events.append((uid, user)))

    user = provider.sign_in("a@b.co", "secret1")

    assert (user.uid, user.id_token, user.refresh_token) == ("u1", "t", "r")
    assert http.calls[0]["url"].endswith("/accounts:signInWithPassword")
    assert http.calls[0]["params"] == {"key": "key-1"}
    assert http.calls[0]["json"]["returnSecureToken"] is True
    assert events == [("u1", user)]


def test_sign_out_is_local_and_notifies_listeners():
    http = FakeSession()
    provider = IdentityToolkitProvider("key-1", session=http)
    events = []
    remove = provider.on_auth_state_change(lambda uid, user: events.append((uid, user)))

    provider.sign_out("u1")
    remove()
    provider.sign_out("u1")

    assert events == [("u1", None)]
    assert http.calls == []


@pytest.mark.parametrize(
    "message, exc_type, text",
    [
        ("INVALID_PASSWORD", AuthenticationError, "Invalid email or password"),
        ("INVALID_LOGIN_CREDENTIALS", AuthenticationError, "Invalid email or password"),
        ("EMAIL_EXISTS", ValidationError, "An account with this email already exists"),
        ("WEAK_PASSWORD : Password should be at least 6 characters", ValidationError, "at least 6"),
        ("SOMETHING_NEW", BackendError, "Authentication failed"),
    ],
)
def test_provider_errors_are_translated(message, exc_type, text):
    provider = IdentityToolkitProvider("key-1", session=FakeSession(_error(message)))

    with pytest.raises(exc_type, match=text):
        provider.sign_up("a@b.co", "secret1")


def test_unreachable_provider():
    provider = IdentityToolkitProvider("key-1", session=FakeSession(requests.ConnectionError("down")))

    with pytest.raises(BackendError, match="Could not reach the authentication service"):
        provider.sign_in("a@b.co", "secret1")


def test_missing_api_key():
    provider = IdentityToolkitProvider("", session=FakeSession())

    with pytest.raises(BackendError, match="missing web API key"):
        provider.sign_in("a@b.co", "secret1")


def test_password_reset_request():
    http = FakeSession(FakeResponse(200, {"email": "a@b.co"}))
    provider = IdentityToolkitProvider("key-1", session=http)

    provider.send_password_reset("a@b.co")

    assert http.calls[0]["url"].endswith("/accounts:sendOobCode")
    assert http.calls[0]["json"] == {"requestType": "PASSWORD_RESET", "email": "a@b.co"}


def test_password_reset_validates_email_before_calling():
    http = FakeSession()
    provider = IdentityToolkitProvider("key-1", session=http)

    with pytest.raises(ValidationError):
        provider.send_password_reset("not-an-email")
    assert http.calls == []

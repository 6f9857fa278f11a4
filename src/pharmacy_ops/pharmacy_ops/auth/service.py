from __future__ import annotations

import logging
from dataclasses import dataclass

from ..backend.store import IdentityProvider
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after sign-in."""

    uid: str
    email: str


class AuthService:
    """Use case: email/password accounts of pharmacy owners (one tenant each)."""

    def __init__(self, identity: IdentityProvider):
        self._identity = identity

    @staticmethod
    def _credentials(email: str, password: str) -> tuple[str, str]:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")
        return email, password

    def sign_up(self, email: str, password: str) -> SessionUser:
        email, password = self._credentials(email, password)
        user = self._identity.sign_up(email, password)
        logger.info("Signed up", extra={"tenant": user.uid})
        return SessionUser(uid=user.uid, email=user.email)

    def sign_in(self, email: str, password: str) -> SessionUser:
        email, password = self._credentials(email, password)
        user = self._identity.sign_in(email, password)
        logger.info("Signed in", extra={"tenant": user.uid})
        return SessionUser(uid=user.uid, email=user.email)

    def sign_out(self, uid: str) -> None:
        self._identity.sign_out(uid)
        logger.info("Signed out", extra={"tenant": uid})

    def request_password_reset(self, email: str) -> None:
        email = (email or "").strip()
        if not email:
            raise ValidationError("Please enter your email address to reset your password.")
        self._identity.send_password_reset(email)

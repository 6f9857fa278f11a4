"""Collaborator interfaces for the managed backend.

Everything the dashboard persists or authenticates goes through one of these
three Protocols. Implementations live next to this module (Firebase, in-memory).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence


@dataclass(frozen=True)
class Record:
    """One document of a collection: its id plus a read-only copy of its fields."""

    id: str
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BlobHandle:
    path: str
    file_name: str


@dataclass(frozen=True)
class AuthUser:
    uid: str
    email: str
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None


SnapshotCallback = Callable[[Sequence[Record]], None]
ErrorCallback = Callable[[Exception], None]
AuthStateCallback = Callable[[str, Optional[AuthUser]], None]


class Subscription(Protocol):
    def unsubscribe(self) -> None:
        raise NotImplementedError


class RecordStore(Protocol):
    def subscribe(
        self,
        path: str,
        on_change: SnapshotCallback,
        *,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        """Push the full collection to ``on_change`` now and after every change."""

        raise NotImplementedError

    def fetch(self, path: str) -> Sequence[Record]:
        raise NotImplementedError

    def get(self, path: str, record_id: str) -> Optional[Record]:
        raise NotImplementedError

    def insert(self, path: str, data: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def update(self, path: str, record_id: str, partial: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, path: str, record_id: str) -> None:
        raise NotImplementedError

    def merge_set(self, path: str, record_id: str, partial: Mapping[str, Any]) -> None:
        """Create the document if missing; otherwise only touch the given fields."""

        raise NotImplementedError


class BlobStore(Protocol):
    def upload(self, path: str, data: bytes, *, content_type: Optional[str] = None) -> BlobHandle:
        raise NotImplementedError

    def get_public_url(self, handle: BlobHandle) -> str:
        raise NotImplementedError

    def delete(self, path: str) -> None:
        raise NotImplementedError


class IdentityProvider(Protocol):
    def sign_up(self, email: str, password: str) -> AuthUser:
        raise NotImplementedError

    def sign_in(self, email: str, password: str) -> AuthUser:
        raise NotImplementedError

    def sign_out(self, uid: str) -> None:
        raise NotImplementedError

    def send_password_reset(self, email: str) -> None:
        raise NotImplementedError

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        """Register ``callback(uid, user_or_none)``; returns the unregister function."""

        raise NotImplementedError

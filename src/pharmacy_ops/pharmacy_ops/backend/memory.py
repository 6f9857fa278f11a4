"""In-process backend.

Behaves like the managed backend where the dashboard depends on it: snapshot
subscriptions fire once on subscribe and after every write to the collection,
and ``merge_set`` merges field by field. Used by the ``memory`` backend setting
and by the test-suite.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email
from ..core.exceptions import AuthenticationError, BackendError, ValidationError
from .store import AuthStateCallback, AuthUser, BlobHandle, ErrorCallback, Record, SnapshotCallback

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _freeze(record_id: str, data: Mapping[str, Any]) -> Record:
    return Record(id=record_id, data=MappingProxyType(copy.deepcopy(dict(data))))


def _deep_merge(target: Dict[str, Any], partial: Mapping[str, Any]) -> None:
    for key, value in partial.items():
        if isinstance(value, Mapping) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = copy.deepcopy(value)


class _MemorySubscription:
    def __init__(self, store: "InMemoryRecordStore", path: str, callback: SnapshotCallback):
        self._store = store
        self._path = path
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._store._remove_listener(self._path, self)

    def deliver(self, records: Sequence[Record]) -> None:
        if self.active:
            self._callback(records)


class InMemoryRecordStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._listeners: Dict[str, List[_MemorySubscription]] = {}

    def _snapshot(self, path: str) -> tuple[Record, ...]:
        with self._lock:
            docs = self._collections.get(path, {})
            return tuple(_freeze(record_id, data) for record_id, data in docs.items())

    def _notify(self, path: str) -> None:
        with self._lock:
            listeners = list(self._listeners.get(path, []))
        if not listeners:
            return
        records = self._snapshot(path)
        for listener in listeners:
            listener.deliver(records)

    def _remove_listener(self, path: str, subscription: _MemorySubscription) -> None:
        with self._lock:
            listeners = self._listeners.get(path, [])
            if subscription in listeners:
                listeners.remove(subscription)

    def listener_count(self, path: str) -> int:
        with self._lock:
            return len(self._listeners.get(path, []))

    def subscribe(
        self,
        path: str,
        on_change: SnapshotCallback,
        *,
        on_error: Optional[ErrorCallback] = None,
    ) -> _MemorySubscription:
        subscription = _MemorySubscription(self, path, on_change)
        with self._lock:
            self._listeners.setdefault(path, []).append(subscription)
        subscription.deliver(self._snapshot(path))
        return subscription

    def fetch(self, path: str) -> Sequence[Record]:
        return self._snapshot(path)

    def get(self, path: str, record_id: str) -> Optional[Record]:
        with self._lock:
            data = self._collections.get(path, {}).get(record_id)
            return _freeze(record_id, data) if data is not None else None

    def insert(self, path: str, data: Mapping[str, Any]) -> str:
        record_id = uuid.uuid4().hex
        with self._lock:
            self._collections.setdefault(path, {})[record_id] = copy.deepcopy(dict(data))
        self._notify(path)
        return record_id

    def update(self, path: str, record_id: str, partial: Mapping[str, Any]) -> None:
        with self._lock:
            doc = self._collections.get(path, {}).get(record_id)
            if doc is None:
                raise BackendError(f"No document to update: {path}/{record_id}")
            for key, value in partial.items():
                doc[key] = copy.deepcopy(value)
        self._notify(path)

    def delete(self, path: str, record_id: str) -> None:
        with self._lock:
            self._collections.get(path, {}).pop(record_id, None)
        self._notify(path)

    def merge_set(self, path: str, record_id: str, partial: Mapping[str, Any]) -> None:
        with self._lock:
            doc = self._collections.setdefault(path, {}).setdefault(record_id, {})
            _deep_merge(doc, partial)
        self._notify(path)


class InMemoryBlobStore:
    def __init__(self, bucket: str = "local-bucket"):
        self._bucket = bucket
        self._blobs: Dict[str, bytes] = {}
        self._content_types: Dict[str, Optional[str]] = {}

    def upload(self, path: str, data: bytes, *, content_type: Optional[str] = None) -> BlobHandle:
        self._blobs[path] = bytes(data)
        self._content_types[path] = content_type
        return BlobHandle(path=path, file_name=path.rsplit("/", 1)[-1])

    def get_public_url(self, handle: BlobHandle) -> str:
        if handle.path not in self._blobs:
            raise BackendError(f"Blob not found: {handle.path}")
        return f"memory://{self._bucket}/{quote(handle.path)}"

    def delete(self, path: str) -> None:
        self._blobs.pop(path, None)
        self._content_types.pop(path, None)

    def exists(self, path: str) -> bool:
        return path in self._blobs

    def read(self, path: str) -> bytes:
        return self._blobs[path]


class InMemoryIdentityProvider:
    def __init__(self):
        self._accounts: Dict[str, tuple[str, str]] = {}
        self._listeners: List[AuthStateCallback] = []
        self.password_resets: List[str] = []

    def _emit(self, uid: str, user: Optional[AuthUser]) -> None:
        for callback in list(self._listeners):
            callback(uid, user)

    def sign_up(self, email: str, password: str) -> AuthUser:
        email = require_email(email).lower()
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
        if email in self._accounts:
            raise ValidationError("An account with this email already exists")

        uid = uuid.uuid4().hex
        self._accounts[email] = (uid, generate_password_hash(password))
        user = AuthUser(uid=uid, email=email, id_token=uuid.uuid4().hex)
        logger.info("Account created", extra={"uid": uid})
        self._emit(uid, user)
        return user

    def sign_in(self, email: str, password: str) -> AuthUser:
        account = self._accounts.get((email or "").strip().lower())
        if not account or not check_password_hash(account[1], password or ""):
            raise AuthenticationError("Invalid email or password")

        uid = account[0]
        user = AuthUser(uid=uid, email=email.strip().lower(), id_token=uuid.uuid4().hex)
        self._emit(uid, user)
        return user

    def sign_out(self, uid: str) -> None:
        self._emit(uid, None)

    def send_password_reset(self, email: str) -> None:
        email = require_email(email).lower()
        if email not in self._accounts:
            raise AuthenticationError("No account found for this email")
        self.password_resets.append(email)

    def on_auth_state_change(self, callback: AuthStateCallback) -> Callable[[], None]:
        self._listeners.append(callback)

        def _remove() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return _remove

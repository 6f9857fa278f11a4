from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from .base import backend_call
from .connection import FirebaseConnection
from .store import ErrorCallback, Record, SnapshotCallback

logger = logging.getLogger(__name__)


class _WatchSubscription:
    def __init__(self, watch):
        self._watch = watch

    def unsubscribe(self) -> None:
        if self._watch is not None:
            self._watch.unsubscribe()
            self._watch = None


def _to_record(snapshot) -> Record:
    return Record(id=snapshot.id, data=snapshot.to_dict() or {})


class FirestoreRecordStore:
    def __init__(self, conn: FirebaseConnection):
        self._conn = conn
        self._client = None

    def _db(self):
        if self._client is None:
            self._client = self._conn.firestore()
        return self._client

    def _collection(self, path: str):
        return self._db().collection(path)

    def subscribe(
        self,
        path: str,
        on_change: SnapshotCallback,
        *,
        on_error: Optional[ErrorCallback] = None,
    ) -> _WatchSubscription:
        def _on_snapshot(docs, changes, read_time) -> None:
            # Runs on the client library's watch thread.
            try:
                on_change(tuple(_to_record(d) for d in docs))
            except Exception as e:
                logger.exception("Snapshot listener failed for %s", path)
                if on_error:
                    on_error(e)

        with backend_call("subscribe to updates"):
            watch = self._collection(path).on_snapshot(_on_snapshot)
        return _WatchSubscription(watch)

    def fetch(self, path: str) -> Sequence[Record]:
        with backend_call("load records"):
            return tuple(_to_record(d) for d in self._collection(path).stream())

    def get(self, path: str, record_id: str) -> Optional[Record]:
        with backend_call("load the record"):
            snapshot = self._collection(path).document(record_id).get()
        return _to_record(snapshot) if snapshot.exists else None

    def insert(self, path: str, data: Mapping[str, Any]) -> str:
        with backend_call("save the record"):
            _, ref = self._collection(path).add(dict(data))
        return ref.id

    def update(self, path: str, record_id: str, partial: Mapping[str, Any]) -> None:
        with backend_call("update the record"):
            self._collection(path).document(record_id).update(dict(partial))

    def delete(self, path: str, record_id: str) -> None:
        with backend_call("delete the record"):
            self._collection(path).document(record_id).delete()

    def merge_set(self, path: str, record_id: str, partial: Mapping[str, Any]) -> None:
        with backend_call("update the record"):
            self._collection(path).document(record_id).set(dict(partial), merge=True)

from __future__ import annotations

from typing import Optional

from .base import backend_call
from .connection import FirebaseConnection
from .store import BlobHandle


class FirebaseBlobStore:
    def __init__(self, conn: FirebaseConnection):
        self._conn = conn

    def upload(self, path: str, data: bytes, *, content_type: Optional[str] = None) -> BlobHandle:
        with backend_call("upload the file"):
            blob = self._conn.bucket().blob(path)
            blob.upload_from_string(data, content_type=content_type or "application/octet-stream")
        return BlobHandle(path=path, file_name=path.rsplit("/", 1)[-1])

    def get_public_url(self, handle: BlobHandle) -> str:
        with backend_call("publish the file"):
            blob = self._conn.bucket().blob(handle.path)
            blob.make_public()
        return blob.public_url

    def delete(self, path: str) -> None:
        with backend_call("remove the file"):
            self._conn.bucket().blob(path).delete()

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, Sequence

from ..backend.base import normalize_timestamp
from ..backend.paths import TenantScope
from ..backend.store import Record, RecordStore, Subscription
from .model import License
from .repository import LicenseRepository


def _to_license(r: Record) -> License:
    d = r.data
    return License(
        license_id=r.id,
        name=str(d.get("name") or ""),
        expiry_date=normalize_timestamp(d.get("expiryDate")),
        license_number=str(d.get("licenseNumber") or ""),
        issuing_authority=str(d.get("issuingAuthority") or ""),
        notes=str(d.get("notes") or ""),
        file_url=str(d.get("fileURL") or ""),
        file_name=str(d.get("fileName") or ""),
    )


class RecordStoreLicenseRepository(LicenseRepository):
    def __init__(self, store: RecordStore, scope: TenantScope):
        self._store = store
        self._path = scope.licenses

    def list_all(self) -> Sequence[License]:
        return [_to_license(r) for r in self._store.fetch(self._path)]

    def get_by_id(self, license_id: str) -> Optional[License]:
        r = self._store.get(self._path, license_id)
        return _to_license(r) if r else None

    def subscribe(self, on_change: Callable[[Sequence[License]], None]) -> Subscription:
        return self._store.subscribe(self._path, lambda records: on_change(tuple(_to_license(r) for r in records)))

    def create(
        self,
        *,
        name: str,
        expiry_date: datetime,
        license_number: str = "",
        issuing_authority: str = "",
        notes: str = "",
        file_url: str = "",
        file_name: str = "",
    ) -> str:
        return self._store.insert(
            self._path,
            {
                "name": name,
                "expiryDate": expiry_date,
                "licenseNumber": license_number,
                "issuingAuthority": issuing_authority,
                "notes": notes,
                "fileURL": file_url,
                "fileName": file_name,
            },
        )

    def renew(
        self,
        *,
        license_id: str,
        expiry_date: datetime,
        notes: str,
        file_url: str,
        file_name: str,
    ) -> None:
        self._store.update(
            self._path,
            license_id,
            {"expiryDate": expiry_date, "notes": notes, "fileURL": file_url, "fileName": file_name},
        )

    def delete(self, license_id: str) -> None:
        self._store.delete(self._path, license_id)

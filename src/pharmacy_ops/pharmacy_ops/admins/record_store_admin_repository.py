from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..backend.paths import TenantScope
from ..backend.store import Record, RecordStore
from .model import Admin
from .repository import AdminRepository

_FIELDS = ("name", "email", "mobile", "designation")


def _to_admin(r: Record) -> Admin:
    d = r.data
    return Admin(
        admin_id=r.id,
        name=str(d.get("name") or ""),
        email=str(d.get("email") or ""),
        mobile=str(d.get("mobile") or ""),
        designation=str(d.get("designation") or ""),
    )


class RecordStoreAdminRepository(AdminRepository):
    def __init__(self, store: RecordStore, scope: TenantScope):
        self._store = store
        self._path = scope.admins

    def list_all(self) -> Sequence[Admin]:
        return [_to_admin(r) for r in self._store.fetch(self._path)]

    def get_by_id(self, admin_id: str) -> Optional[Admin]:
        r = self._store.get(self._path, admin_id)
        return _to_admin(r) if r else None

    def create(self, *, name: str, email: str, mobile: str, designation: str) -> str:
        return self._store.insert(
            self._path,
            {"name": name, "email": email, "mobile": mobile, "designation": designation},
        )

    def update(self, *, admin_id: str, changes: Mapping[str, Any]) -> None:
        partial = {k: v for k, v in changes.items() if k in _FIELDS}
        if partial:
            self._store.update(self._path, admin_id, partial)

    def delete(self, admin_id: str) -> None:
        self._store.delete(self._path, admin_id)

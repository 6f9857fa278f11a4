from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence

from ..backend.paths import TenantScope
from ..backend.store import Record, RecordStore, Subscription
from .model import StaffMember
from .repository import StaffRepository

_FIELDS = {
    "name": "name",
    "store": "store",
    "total_cl": "totalCL",
    "total_sl": "totalSL",
    "total_el": "totalEL",
}


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _to_staff(r: Record) -> StaffMember:
    d = r.data
    return StaffMember(
        staff_id=r.id,
        name=str(d.get("name") or ""),
        store=str(d.get("store") or ""),
        total_cl=_as_int(d.get("totalCL")),
        total_sl=_as_int(d.get("totalSL")),
        total_el=_as_int(d.get("totalEL")),
    )


class RecordStoreStaffRepository(StaffRepository):
    def __init__(self, store: RecordStore, scope: TenantScope):
        self._store = store
        self._path = scope.staff

    def list_all(self) -> Sequence[StaffMember]:
        return [_to_staff(r) for r in self._store.fetch(self._path)]

    def get_by_id(self, staff_id: str) -> Optional[StaffMember]:
        r = self._store.get(self._path, staff_id)
        return _to_staff(r) if r else None

    def subscribe(self, on_change: Callable[[Sequence[StaffMember]], None]) -> Subscription:
        return self._store.subscribe(self._path, lambda records: on_change(tuple(_to_staff(r) for r in records)))

    def create(self, *, name: str, store: str, total_cl: int, total_sl: int, total_el: int) -> str:
        return self._store.insert(
            self._path,
            {"name": name, "store": store, "totalCL": total_cl, "totalSL": total_sl, "totalEL": total_el},
        )

    def update(self, *, staff_id: str, changes: Mapping[str, Any]) -> None:
        partial = {_FIELDS[k]: v for k, v in changes.items() if k in _FIELDS}
        if partial:
            self._store.update(self._path, staff_id, partial)

    def delete(self, staff_id: str) -> None:
        self._store.delete(self._path, staff_id)

from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from ..backend.paths import TenantScope
from ..backend.store import RecordStore, Subscription
from ..common.datetime_utils import date_key
from ..core.enums import AttendanceStatus
from .model import AttendanceSnapshot
from .repository import AttendanceRepository

_MARKABLE = {s.value: s for s in AttendanceStatus.markable()}


def _to_snapshot(day: date, data: Optional[Mapping[str, Any]]) -> AttendanceSnapshot:
    statuses = {
        str(staff_id): _MARKABLE[value]
        for staff_id, value in (data or {}).items()
        if isinstance(value, str) and value in _MARKABLE
    }
    return AttendanceSnapshot(day=day, statuses=MappingProxyType(statuses))


class RecordStoreAttendanceRepository(AttendanceRepository):
    """One document per date (id ``YYYY-MM-DD``), one field per staff id."""

    def __init__(self, store: RecordStore, scope: TenantScope):
        self._store = store
        self._path = scope.attendance

    def get_snapshot(self, day: date) -> AttendanceSnapshot:
        r = self._store.get(self._path, date_key(day))
        return _to_snapshot(day, r.data if r else None)

    def subscribe_day(self, day: date, on_change: Callable[[AttendanceSnapshot], None]) -> Subscription:
        key = date_key(day)

        def _on_records(records) -> None:
            data = next((r.data for r in records if r.id == key), None)
            on_change(_to_snapshot(day, data))

        return self._store.subscribe(self._path, _on_records)

    def set_status(self, *, day: date, staff_id: str, status: AttendanceStatus) -> None:
        self._store.merge_set(self._path, date_key(day), {staff_id: status.value})

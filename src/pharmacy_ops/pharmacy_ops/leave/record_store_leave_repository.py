from __future__ import annotations

from datetime import date
from typing import Callable, Sequence

from ..backend.base import normalize_date
from ..backend.paths import TenantScope
from ..backend.store import Record, RecordStore, Subscription
from ..common.datetime_utils import date_key
from ..core.enums import LeaveType
from .model import LeaveRecord
from .repository import LeaveRepository


def _to_leave(r: Record) -> LeaveRecord:
    d = r.data
    return LeaveRecord(
        record_id=r.id,
        staff_id=str(d.get("staffId") or ""),
        staff_name=str(d.get("staffName") or ""),
        leave_type=str(d.get("leaveType") or ""),
        start_date=normalize_date(d.get("startDate")),
        end_date=normalize_date(d.get("endDate")),
        reason=str(d.get("reason") or ""),
    )


class RecordStoreLeaveRepository(LeaveRepository):
    def __init__(self, store: RecordStore, scope: TenantScope):
        self._store = store
        self._path = scope.leave_records

    def list_all(self) -> Sequence[LeaveRecord]:
        return [_to_leave(r) for r in self._store.fetch(self._path)]

    def subscribe(self, on_change: Callable[[Sequence[LeaveRecord]], None]) -> Subscription:
        return self._store.subscribe(self._path, lambda records: on_change(tuple(_to_leave(r) for r in records)))

    def create(
        self,
        *,
        staff_id: str,
        staff_name: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> str:
        return self._store.insert(
            self._path,
            {
                "staffId": staff_id,
                "staffName": staff_name,
                "leaveType": leave_type.value,
                "startDate": date_key(start_date),
                "endDate": date_key(end_date),
                "reason": reason,
            },
        )

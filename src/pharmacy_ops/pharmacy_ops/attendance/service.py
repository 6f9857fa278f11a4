from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime
from typing import Optional, Sequence

from ..backend.paths import TenantScope
from ..common.datetime_utils import local_date
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository
from .model import AttendanceRow, AttendanceSnapshot
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def build_day_sheet(staff: Sequence[StaffMember], snapshot: AttendanceSnapshot) -> list[AttendanceRow]:
    rows = [
        AttendanceRow(staff_id=m.staff_id, staff_name=m.name, store=m.store, status=snapshot.status_for(m.staff_id))
        for m in staff
    ]
    rows.sort(key=lambda r: r.staff_name.lower())
    return rows


def summarize(rows: Sequence[AttendanceRow]) -> dict[str, int]:
    counts = Counter(r.status for r in rows)
    return {status.value: counts.get(status, 0) for status in AttendanceStatus}


def orphaned_entries(staff: Sequence[StaffMember], snapshot: AttendanceSnapshot) -> list[str]:
    """Staff ids marked in the snapshot that no longer exist."""

    known = {m.staff_id for m in staff}
    return sorted(staff_id for staff_id in snapshot.statuses if staff_id not in known)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: StaffRepository,
        scope: TenantScope,
        *,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self._attendance = attendance
        self._staff = staff
        self._scope = scope
        self._timezone = timezone

    @property
    def repository(self) -> AttendanceRepository:
        return self._attendance

    def today(self, now: datetime) -> date:
        return local_date(now, self._timezone)

    def status_for(self, staff_id: str, *, now: datetime) -> AttendanceStatus:
        return self._attendance.get_snapshot(self.today(now)).status_for(staff_id)

    def mark(self, staff_id: str, status: str, *, now: datetime) -> None:
        try:
            value = AttendanceStatus(status)
        except ValueError:
            value = None
        if value not in AttendanceStatus.markable():
            allowed = ", ".join(s.value for s in AttendanceStatus.markable())
            raise ValidationError(f"Status must be one of: {allowed}")

        if not self._staff.get_by_id(staff_id):
            raise ValidationError("Staff member not found")

        day = self.today(now)
        self._attendance.set_status(day=day, staff_id=staff_id, status=value)
        logger.info(
            "Attendance marked",
            extra={"tenant": self._scope.uid, "staff_id": staff_id, "day": day.isoformat(), "status": value.value},
        )

    def day_sheet(
        self,
        *,
        now: datetime,
        staff: Optional[Sequence[StaffMember]] = None,
        snapshot: Optional[AttendanceSnapshot] = None,
    ) -> list[AttendanceRow]:
        members = staff if staff is not None else self._staff.list_all()
        snap = snapshot if snapshot is not None else self._attendance.get_snapshot(self.today(now))
        return build_day_sheet(members, snap)

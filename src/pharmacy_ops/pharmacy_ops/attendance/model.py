from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceSnapshot:
    """All statuses recorded for one tenant-local calendar date."""

    day: date
    statuses: Mapping[str, AttendanceStatus] = field(default_factory=dict)

    def status_for(self, staff_id: str) -> AttendanceStatus:
        return self.statuses.get(staff_id, AttendanceStatus.NOT_MARKED)


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model for the daily sheet / export."""

    staff_id: str
    staff_name: str
    store: str
    status: AttendanceStatus

from __future__ import annotations

from enum import Enum


class LeaveType(str, Enum):
    """Leave categories with per-staff entitlements."""

    CL = "CL"
    SL = "SL"
    EL = "EL"

    @property
    def entitlement_field(self) -> str:
        return f"total_{self.value.lower()}"


class AttendanceStatus(str, Enum):
    """Day status of a staff member; NOT_MARKED is never written to the store."""

    PRESENT = "Present"
    ABSENT = "Absent"
    ON_LEAVE = "On Leave"
    NOT_MARKED = "Not Marked"

    @classmethod
    def markable(cls) -> tuple["AttendanceStatus", ...]:
        return (cls.PRESENT, cls.ABSENT, cls.ON_LEAVE)


class ExpiryState(str, Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    OK = "ok"

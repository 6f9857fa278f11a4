from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import LeaveType


@dataclass(frozen=True)
class StaffMember:
    """Domain entity: a staff member with annual leave entitlements."""

    staff_id: str
    name: str
    store: str
    total_cl: int = 0
    total_sl: int = 0
    total_el: int = 0

    def entitlement(self, leave_type: LeaveType) -> int:
        return int(getattr(self, leave_type.entitlement_field))

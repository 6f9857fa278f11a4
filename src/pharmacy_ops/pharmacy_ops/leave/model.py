from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional

from ..core.enums import LeaveType


@dataclass(frozen=True)
class LeaveRecord:
    """Domain entity: one filed leave. Add-only.

    ``staff_name`` is the name at filing time and is not refreshed on rename.
    ``leave_type`` keeps the stored value as-is, so unknown categories survive
    loading and are simply ignored by the ledger.
    """

    record_id: str
    staff_id: str
    staff_name: str
    leave_type: str
    start_date: Optional[date]
    end_date: Optional[date]
    reason: str = ""

    @property
    def span_days(self) -> Optional[int]:
        if not self.start_date or not self.end_date:
            return None
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class LeaveBalance:
    total: int
    taken: int
    balance: int


@dataclass(frozen=True)
class StaffLeaveBalance:
    staff_id: str
    staff_name: str
    store: str
    balances: Mapping[LeaveType, LeaveBalance] = field(default_factory=dict)

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..backend.paths import TenantScope
from ..common.validators import optional_text, require_choice, require_date
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository
from .ledger import compute_leave_balances, orphaned_records
from .model import LeaveRecord, StaffLeaveBalance
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


def _record_sort_key(r: LeaveRecord):
    return r.start_date or date.min


class LeaveService:
    def __init__(self, leave: LeaveRepository, staff: StaffRepository, scope: TenantScope):
        self._leave = leave
        self._staff = staff
        self._scope = scope

    @property
    def repository(self) -> LeaveRepository:
        return self._leave

    def record_leave(
        self,
        *,
        staff_id: str,
        leave_type: str,
        start_date,
        end_date,
        reason: str = "",
    ) -> str:
        member = self._staff.get_by_id(optional_text(staff_id)) if optional_text(staff_id) else None
        if not member:
            raise ValidationError("Please select a staff member")

        kind = LeaveType(require_choice(leave_type, "Leave type", [t.value for t in LeaveType]))
        start = require_date(start_date, "Start date")
        end = require_date(end_date, "End date")
        if end < start:
            raise ValidationError("End date cannot be before start date")

        record_id = self._leave.create(
            staff_id=member.staff_id,
            staff_name=member.name,
            leave_type=kind,
            start_date=start,
            end_date=end,
            reason=optional_text(reason),
        )
        logger.info(
            "Leave recorded",
            extra={"tenant": self._scope.uid, "record_id": record_id, "leave_type": kind.value},
        )
        return record_id

    def list_records(
        self,
        *,
        staff_id: Optional[str] = None,
        records: Optional[Sequence[LeaveRecord]] = None,
    ) -> list[LeaveRecord]:
        source = records if records is not None else self._leave.list_all()
        rows = [r for r in source if staff_id is None or r.staff_id == staff_id]
        rows.sort(key=_record_sort_key, reverse=True)
        return rows

    def balances(
        self,
        *,
        staff: Optional[Sequence[StaffMember]] = None,
        records: Optional[Sequence[LeaveRecord]] = None,
    ) -> list[StaffLeaveBalance]:
        members = list(staff) if staff is not None else list(self._staff.list_all())
        source = records if records is not None else self._leave.list_all()

        by_staff = compute_leave_balances(members, source)
        out = [
            StaffLeaveBalance(
                staff_id=m.staff_id,
                staff_name=m.name,
                store=m.store,
                balances=by_staff[m.staff_id],
            )
            for m in members
        ]
        out.sort(key=lambda b: b.staff_name.lower())
        return out

    def orphaned(
        self,
        *,
        staff: Optional[Sequence[StaffMember]] = None,
        records: Optional[Sequence[LeaveRecord]] = None,
    ) -> list[LeaveRecord]:
        members = staff if staff is not None else self._staff.list_all()
        source = records if records is not None else self._leave.list_all()
        return orphaned_records(members, source)

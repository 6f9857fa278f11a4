"""Leave balance aggregation.

Every leave record consumes exactly one unit of its category, whatever the
span between its start and end dates. Balances can go negative. Records with
a category outside CL/SL/EL are skipped.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

from ..core.enums import LeaveType
from ..staff.model import StaffMember
from .model import LeaveBalance, LeaveRecord


def count_taken(records: Iterable[LeaveRecord]) -> Counter:
    """Counter keyed by (staff_id, LeaveType)."""

    taken: Counter = Counter()
    for r in records:
        try:
            leave_type = LeaveType(r.leave_type)
        except ValueError:
            continue
        taken[(r.staff_id, leave_type)] += 1
    return taken


def compute_leave_balances(
    staff: Sequence[StaffMember],
    records: Iterable[LeaveRecord],
) -> dict[str, dict[LeaveType, LeaveBalance]]:
    taken = count_taken(records)

    balances: dict[str, dict[LeaveType, LeaveBalance]] = {}
    for member in staff:
        per_type: dict[LeaveType, LeaveBalance] = {}
        for leave_type in LeaveType:
            total = member.entitlement(leave_type)
            used = taken[(member.staff_id, leave_type)]
            per_type[leave_type] = LeaveBalance(total=total, taken=used, balance=total - used)
        balances[member.staff_id] = per_type
    return balances


def orphaned_records(staff: Sequence[StaffMember], records: Iterable[LeaveRecord]) -> list[LeaveRecord]:
    """Records whose staff member no longer exists."""

    known = {m.staff_id for m in staff}
    return [r for r in records if r.staff_id not in known]

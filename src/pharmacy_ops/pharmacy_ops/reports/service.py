from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceSnapshot
from ..attendance.service import AttendanceService
from ..common.datetime_utils import format_date
from ..core.enums import ExpiryState, LeaveType
from ..leave.model import LeaveRecord
from ..leave.service import LeaveService
from ..licenses.classifier import expiry_state
from ..licenses.model import License
from ..licenses.service import LicenseService, sort_by_expiry
from ..staff.model import StaffMember
from ..staff.service import StaffService
from .export import ExportFile, build_export

LICENSE_COLUMNS = [
    "name",
    "license_number",
    "issuing_authority",
    "expiry_date",
    "status",
    "notes",
    "file_url",
]
LICENSE_LABELS = {
    "name": "License Name",
    "license_number": "License Number",
    "issuing_authority": "Issuing Authority",
    "expiry_date": "Expiry Date",
    "status": "Status",
    "notes": "Notes",
    "file_url": "Document",
}

ATTENDANCE_COLUMNS = ["date", "staff_name", "store", "status"]
ATTENDANCE_LABELS = {"date": "Date", "staff_name": "Staff", "store": "Store", "status": "Status"}

_STATE_LABELS = {
    ExpiryState.EXPIRED: "Expired",
    ExpiryState.EXPIRING_SOON: "Expiring Soon",
    ExpiryState.OK: "Active",
    None: "No Expiry Date",
}


class ReportService:
    """Builds export files from the live collections (or from snapshots passed in)."""

    def __init__(
        self,
        licenses: LicenseService,
        staff: StaffService,
        leave: LeaveService,
        attendance: AttendanceService,
    ):
        self._licenses = licenses
        self._staff = staff
        self._leave = leave
        self._attendance = attendance

    def _stamp(self, now: datetime) -> str:
        """File-name date: the tenant-local calendar day of ``now``."""

        return self._attendance.today(now).strftime("%Y%m%d")

    def licenses_export(self, *, now: datetime, licenses: Optional[Sequence[License]] = None) -> ExportFile:
        source = licenses if licenses is not None else self._licenses.repository.list_all()
        rows = [
            {
                "name": lic.name,
                "license_number": lic.license_number,
                "issuing_authority": lic.issuing_authority,
                "expiry_date": format_date(lic.expiry_date),
                "status": _STATE_LABELS[expiry_state(lic, now)],
                "notes": lic.notes,
                "file_url": lic.file_url,
            }
            for lic in sort_by_expiry(source)
        ]
        return build_export(rows, f"licenses_{self._stamp(now)}.csv", LICENSE_COLUMNS, labels=LICENSE_LABELS)

    def leave_balances_export(
        self,
        *,
        now: datetime,
        staff: Optional[Sequence[StaffMember]] = None,
        records: Optional[Sequence[LeaveRecord]] = None,
    ) -> ExportFile:
        rows = []
        for b in self._leave.balances(staff=staff, records=records):
            row = {"Staff": b.staff_name, "Store": b.store}
            for leave_type in LeaveType:
                bal = b.balances[leave_type]
                row[f"{leave_type.value} Total"] = bal.total
                row[f"{leave_type.value} Taken"] = bal.taken
                row[f"{leave_type.value} Balance"] = bal.balance
            rows.append(row)
        return build_export(rows, f"leave_balances_{self._stamp(now)}.csv")

    def leave_records_export(
        self,
        *,
        now: datetime,
        staff: Optional[Sequence[StaffMember]] = None,
        records: Optional[Sequence[LeaveRecord]] = None,
    ) -> ExportFile:
        members = staff if staff is not None else self._staff.repository.list_all()
        known = {m.staff_id for m in members}
        rows = [
            {
                "Staff": r.staff_name,
                "Leave Type": r.leave_type,
                "Start Date": r.start_date,
                "End Date": r.end_date,
                "Days": r.span_days,
                "Reason": r.reason,
                "Staff Removed": "Yes" if r.staff_id not in known else "",
            }
            for r in self._leave.list_records(records=records)
        ]
        return build_export(rows, f"leave_records_{self._stamp(now)}.csv")

    def attendance_export(
        self,
        *,
        now: datetime,
        staff: Optional[Sequence[StaffMember]] = None,
        snapshot: Optional[AttendanceSnapshot] = None,
    ) -> ExportFile:
        day = snapshot.day if snapshot is not None else self._attendance.today(now)
        rows = [
            {"date": format_date(day), "staff_name": r.staff_name, "store": r.store, "status": r.status}
            for r in self._attendance.day_sheet(now=now, staff=staff, snapshot=snapshot)
        ]
        return build_export(
            rows,
            f"attendance_{day.strftime('%Y%m%d')}.csv",
            ATTENDANCE_COLUMNS,
            labels=ATTENDANCE_LABELS,
        )

    def staff_export(self, *, now: datetime, staff: Optional[Sequence[StaffMember]] = None) -> ExportFile:
        members = staff if staff is not None else self._staff.list_staff()
        rows = [
            {
                "Name": m.name,
                "Store": m.store,
                "Total CL": m.total_cl,
                "Total SL": m.total_sl,
                "Total EL": m.total_el,
            }
            for m in members
        ]
        return build_export(rows, f"staff_{self._stamp(now)}.csv")

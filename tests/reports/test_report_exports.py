from __future__ import annotations

import csv
import io
from datetime import datetime, timedelta, timezone

import pytest

from src.pharmacy_ops.pharmacy_ops.core.exceptions import NothingToExportError


def _rows(export) -> list[dict]:
    return list(csv.DictReader(io.StringIO(export.content)))


def test_licenses_export_uses_labels_and_status(tenant, fixed_now):
    service = tenant.license_service
    service.add_license(name="Trade License", expiry_date=(fixed_now + timedelta(days=200)).date())
    service.add_license(name="Drug License", expiry_date=(fixed_now - timedelta(days=1)).date(), license_number="DL-1")

    export = tenant.report_service.licenses_export(now=fixed_now)

    rows = _rows(export)
    assert export.filename == "licenses_20240615.csv"
    assert [r["License Name"] for r in rows] == ["Drug License", "Trade License"]
    assert rows[0]["Status"] == "Expired"
    assert rows[0]["License Number"] == "DL-1"
    assert rows[1]["Status"] == "Active"


def test_leave_balance_export(tenant, fixed_now):
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store", total_cl=2)
    tenant.leave_service.record_leave(staff_id=staff_id, leave_type="CL", start_date="2024-06-03", end_date="2024-06-03")

    [row] = _rows(tenant.report_service.leave_balances_export(now=fixed_now))

    assert (row["Staff"], row["CL Total"], row["CL Taken"], row["CL Balance"]) == ("Asha", "2", "1", "1")


def test_leave_records_export_flags_removed_staff(tenant, fixed_now):
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store")
    tenant.leave_service.record_leave(staff_id=staff_id, leave_type="EL", start_date="2024-06-03", end_date="2024-06-05")
    tenant.staff_service.delete_staff(staff_id, confirmed=True)

    [row] = _rows(tenant.report_service.leave_records_export(now=fixed_now))

    assert (row["Start Date"], row["End Date"], row["Days"]) == ("2024-06-03", "2024-06-05", "3")
    assert row["Staff Removed"] == "Yes"


def test_attendance_export_covers_every_staff_member(tenant, fixed_now):
    asha = tenant.staff_service.add_staff(name="Asha", store="Main Store")
    tenant.staff_service.add_staff(name="Ravi", store="Branch Store")
    tenant.attendance_service.mark(asha, "Present", now=fixed_now)

    export = tenant.report_service.attendance_export(now=fixed_now)

    assert export.filename == "attendance_20240615.csv"
    assert [(r["Staff"], r["Status"]) for r in _rows(export)] == [("Asha", "Present"), ("Ravi", "Not Marked")]


def test_exports_of_empty_collections(tenant, fixed_now):
    with pytest.raises(NothingToExportError):
        tenant.report_service.licenses_export(now=fixed_now)
    with pytest.raises(NothingToExportError):
        tenant.report_service.staff_export(now=fixed_now)


def test_file_names_use_the_tenant_local_day(tenant):
    late_evening_utc = datetime(2024, 6, 15, 20, 0, tzinfo=timezone.utc)
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store")
    tenant.leave_service.record_leave(staff_id=staff_id, leave_type="CL", start_date="2024-06-03", end_date="2024-06-03")
    tenant.attendance_service.mark(staff_id, "Present", now=late_evening_utc)

    reports = tenant.report_service
    names = [
        reports.staff_export(now=late_evening_utc).filename,
        reports.leave_balances_export(now=late_evening_utc).filename,
        reports.leave_records_export(now=late_evening_utc).filename,
        reports.attendance_export(now=late_evening_utc).filename,
    ]

    assert names == [
        "staff_20240616.csv",
        "leave_balances_20240616.csv",
        "leave_records_20240616.csv",
        "attendance_20240616.csv",
    ]

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from .admins.record_store_admin_repository import RecordStoreAdminRepository
from .admins.service import AdminService
from .attendance.record_store_attendance_repository import RecordStoreAttendanceRepository
from .attendance.service import AttendanceService
from .backend.connection import FirebaseConfig, FirebaseConnection
from .backend.firebase_blob_store import FirebaseBlobStore
from .backend.firestore_record_store import FirestoreRecordStore
from .backend.identity_toolkit import IdentityToolkitProvider
from .backend.memory import InMemoryBlobStore, InMemoryIdentityProvider, InMemoryRecordStore
from .backend.paths import TenantScope
from .backend.store import BlobStore, IdentityProvider, RecordStore
from .core.constants import DEFAULT_APP_ID, DEFAULT_STORES, DEFAULT_TIMEZONE, EXPIRING_SOON_DAYS
from .dashboard.session import SessionRegistry
from .leave.record_store_leave_repository import RecordStoreLeaveRepository
from .leave.service import LeaveService
from .licenses.record_store_license_repository import RecordStoreLicenseRepository
from .licenses.service import LicenseService
from .reports.service import ReportService
from .staff.record_store_staff_repository import RecordStoreStaffRepository
from .staff.service import StaffService


@dataclass(frozen=True)
class TenantContainer:
    """Services bound to one signed-in identity; every path is scoped to it."""

    scope: TenantScope

    license_service: LicenseService
    staff_service: StaffService
    leave_service: LeaveService
    attendance_service: AttendanceService
    admin_service: AdminService
    report_service: ReportService


@dataclass(frozen=True)
class TenantFactory:
    records: RecordStore
    blobs: BlobStore
    app_id: str
    stores: tuple[str, ...]
    timezone: str
    expiring_soon_window: timedelta

    def __call__(self, uid: str) -> TenantContainer:
        scope = TenantScope(uid=uid, app_id=self.app_id)

        licenses_repo = RecordStoreLicenseRepository(self.records, scope)
        staff_repo = RecordStoreStaffRepository(self.records, scope)
        leave_repo = RecordStoreLeaveRepository(self.records, scope)
        attendance_repo = RecordStoreAttendanceRepository(self.records, scope)
        admins_repo = RecordStoreAdminRepository(self.records, scope)

        license_service = LicenseService(licenses_repo, self.blobs, scope, window=self.expiring_soon_window)
        staff_service = StaffService(staff_repo, scope, stores=self.stores)
        leave_service = LeaveService(leave_repo, staff_repo, scope)
        attendance_service = AttendanceService(attendance_repo, staff_repo, scope, timezone=self.timezone)
        admin_service = AdminService(admins_repo, scope)
        report_service = ReportService(license_service, staff_service, leave_service, attendance_service)

        return TenantContainer(
            scope=scope,
            license_service=license_service,
            staff_service=staff_service,
            leave_service=leave_service,
            attendance_service=attendance_service,
            admin_service=admin_service,
            report_service=report_service,
        )


@dataclass(frozen=True)
class Container:
    records: RecordStore
    blobs: BlobStore
    identity: IdentityProvider

    tenants: TenantFactory
    sessions: SessionRegistry

    def tenant(self, uid: str) -> TenantContainer:
        return self.tenants(uid)


def _build_backends(settings: Any) -> tuple[RecordStore, BlobStore, IdentityProvider]:
    backend = str(getattr(settings, "BACKEND", "memory")).lower()

    if backend == "firebase":
        fc = dict(getattr(settings, "FIREBASE_CONFIG"))
        conn = FirebaseConnection.get_instance(
            FirebaseConfig(
                project_id=str(fc["project_id"]),
                storage_bucket=str(fc["storage_bucket"]),
                api_key=str(fc.get("api_key") or ""),
                credentials_file=fc.get("credentials_file") or None,
            )
        )
        return FirestoreRecordStore(conn), FirebaseBlobStore(conn), IdentityToolkitProvider(conn.config.api_key)

    if backend == "memory":
        return InMemoryRecordStore(), InMemoryBlobStore(), InMemoryIdentityProvider()

    raise ValueError(f"Unknown BACKEND setting: {backend!r}")


def build_container(*, settings: Any) -> Container:
    records, blobs, identity = _build_backends(settings)

    tenants = TenantFactory(
        records=records,
        blobs=blobs,
        app_id=str(getattr(settings, "APP_ID", DEFAULT_APP_ID)),
        stores=tuple(getattr(settings, "STORES", DEFAULT_STORES)),
        timezone=str(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        expiring_soon_window=timedelta(days=int(getattr(settings, "EXPIRING_SOON_DAYS", EXPIRING_SOON_DAYS))),
    )
    sessions = SessionRegistry(tenants)
    sessions.attach(identity)

    return Container(records=records, blobs=blobs, identity=identity, tenants=tenants, sessions=sessions)

"""Tenant-scoped collection and blob paths.

Collections are created by the backend on first write, so these constants are
the single source of truth for the layout.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_APP_ID

COLLECTION_LICENSES = "licenses"
COLLECTION_STAFF = "staff"
COLLECTION_LEAVE_RECORDS = "leaveRecords"
COLLECTION_ATTENDANCE = "attendance"
COLLECTION_ADMINS = "admins"


@dataclass(frozen=True)
class TenantScope:
    uid: str
    app_id: str = DEFAULT_APP_ID

    def __post_init__(self) -> None:
        if not self.uid or "/" in self.uid:
            raise ValueError(f"Invalid tenant uid: {self.uid!r}")

    def collection(self, name: str) -> str:
        return f"artifacts/{self.app_id}/users/{self.uid}/{name}"

    @property
    def licenses(self) -> str:
        return self.collection(COLLECTION_LICENSES)

    @property
    def staff(self) -> str:
        return self.collection(COLLECTION_STAFF)

    @property
    def leave_records(self) -> str:
        return self.collection(COLLECTION_LEAVE_RECORDS)

    @property
    def attendance(self) -> str:
        return self.collection(COLLECTION_ATTENDANCE)

    @property
    def admins(self) -> str:
        return self.collection(COLLECTION_ADMINS)

    def license_blob(self, file_name: str) -> str:
        return f"licenses/{self.uid}/{file_name}"

"""Live dashboard state of one signed-in tenant.

A session subscribes to the tenant's collections and keeps the latest pushed
snapshot of each as an immutable tuple. ``view()`` derives everything the
dashboard shows from those tuples on every call; nothing derived is cached,
so expiry buckets and "today" follow the clock even when no data changes.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ..attendance.model import AttendanceRow, AttendanceSnapshot
from ..attendance.service import build_day_sheet, orphaned_entries, summarize
from ..backend.store import IdentityProvider, Subscription
from ..common.datetime_utils import now_utc
from ..core.exceptions import BackendError
from ..leave.model import LeaveRecord, StaffLeaveBalance
from ..licenses.model import ExpiryAlert, License
from ..staff.model import StaffMember

if TYPE_CHECKING:
    from ..container import TenantContainer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    generated_at: datetime
    today: date
    alerts: tuple[ExpiryAlert, ...]
    expired_count: int
    expiring_soon_count: int
    leave_balances: tuple[StaffLeaveBalance, ...]
    orphaned_leave: tuple[LeaveRecord, ...]
    attendance: tuple[AttendanceRow, ...]
    attendance_summary: dict[str, int]
    orphaned_attendance: tuple[str, ...]


class DashboardSession:
    def __init__(self, tenant: "TenantContainer", *, clock: Callable[[], datetime] = now_utc):
        self._tenant = tenant
        self._clock = clock
        self._lock = threading.Lock()
        self._subscriptions: Dict[str, Subscription] = {}

        self._licenses: tuple[License, ...] = ()
        self._staff: tuple[StaffMember, ...] = ()
        self._leave: tuple[LeaveRecord, ...] = ()
        self._attendance_day: Optional[date] = None
        self._attendance: Optional[AttendanceSnapshot] = None

    @property
    def uid(self) -> str:
        return self._tenant.scope.uid

    @property
    def is_open(self) -> bool:
        return bool(self._subscriptions)

    @property
    def licenses(self) -> tuple[License, ...]:
        return self._licenses

    @property
    def staff(self) -> tuple[StaffMember, ...]:
        return self._staff

    @property
    def leave_records(self) -> tuple[LeaveRecord, ...]:
        return self._leave

    @property
    def attendance(self) -> AttendanceSnapshot:
        return self._attendance or AttendanceSnapshot(day=self._tenant.attendance_service.today(self._clock()))

    # Snapshot listeners: swap in the new tuple, never mutate the old one.
    def _on_licenses(self, licenses) -> None:
        self._licenses = tuple(licenses)

    def _on_staff(self, staff) -> None:
        self._staff = tuple(staff)

    def _on_leave(self, records) -> None:
        self._leave = tuple(records)

    def _on_attendance(self, snapshot: AttendanceSnapshot) -> None:
        if snapshot.day == self._attendance_day:
            self._attendance = snapshot

    def open(self) -> "DashboardSession":
        with self._lock:
            if self._subscriptions:
                return self

            t = self._tenant
            try:
                # Prime synchronously; the first pushed snapshot may arrive later.
                self._licenses = tuple(t.license_service.repository.list_all())
                self._staff = tuple(t.staff_service.repository.list_all())
                self._leave = tuple(t.leave_service.repository.list_all())

                self._subscriptions["licenses"] = t.license_service.repository.subscribe(self._on_licenses)
                self._subscriptions["staff"] = t.staff_service.repository.subscribe(self._on_staff)
                self._subscriptions["leave"] = t.leave_service.repository.subscribe(self._on_leave)
                self._follow_day(t.attendance_service.today(self._clock()))
            except BackendError:
                self._release()
                raise

        logger.info("Dashboard session opened", extra={"tenant": self.uid})
        return self

    def _follow_day(self, day: date) -> None:
        """Move the attendance subscription to ``day``; a new day starts empty."""

        if day == self._attendance_day and "attendance" in self._subscriptions:
            return

        old = self._subscriptions.pop("attendance", None)
        if old is not None:
            old.unsubscribe()

        repo = self._tenant.attendance_service.repository
        self._attendance_day = day
        self._attendance = repo.get_snapshot(day)
        self._subscriptions["attendance"] = repo.subscribe_day(day, self._on_attendance)

    def _release(self) -> None:
        subscriptions, self._subscriptions = self._subscriptions, {}
        for sub in subscriptions.values():
            sub.unsubscribe()
        self._attendance_day = None

    def close(self) -> None:
        with self._lock:
            if not self._subscriptions:
                return
            self._release()
        logger.info("Dashboard session closed", extra={"tenant": self.uid})

    def view(self, now: Optional[datetime] = None) -> DashboardView:
        now = now or self._clock()
        t = self._tenant
        today = t.attendance_service.today(now)
        with self._lock:
            # A session closed concurrently must not resubscribe.
            if self._subscriptions:
                self._follow_day(today)

        licenses, staff, leave = self._licenses, self._staff, self._leave
        attendance = self._attendance
        if attendance is None or attendance.day != today:
            attendance = AttendanceSnapshot(day=today)

        buckets = t.license_service.classify(now, licenses)
        sheet = build_day_sheet(staff, attendance)
        return DashboardView(
            generated_at=now,
            today=today,
            alerts=tuple(t.license_service.alerts(now, licenses)),
            expired_count=len(buckets.expired),
            expiring_soon_count=len(buckets.expiring_soon),
            leave_balances=tuple(t.leave_service.balances(staff=staff, records=leave)),
            orphaned_leave=tuple(t.leave_service.orphaned(staff=staff, records=leave)),
            attendance=tuple(sheet),
            attendance_summary=summarize(sheet),
            orphaned_attendance=tuple(orphaned_entries(staff, attendance)),
        )


class SessionRegistry:
    """Owns one DashboardSession per signed-in uid.

    Attached to the identity provider: a sign-in opens the tenant's session,
    a sign-out closes it and releases its subscriptions.
    """

    def __init__(self, tenant_factory: Callable[[str], "TenantContainer"], *, clock: Callable[[], datetime] = now_utc):
        self._tenant_factory = tenant_factory
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: Dict[str, DashboardSession] = {}

    def attach(self, identity: IdentityProvider) -> Callable[[], None]:
        return identity.on_auth_state_change(self._on_auth_change)

    def _on_auth_change(self, uid: str, user) -> None:
        if user is None:
            self.close(uid)
            return
        try:
            self.open(uid)
        except BackendError:
            # The next request for this uid opens it again.
            logger.exception("Could not open dashboard session at sign-in", extra={"tenant": uid})

    def get(self, uid: str) -> Optional[DashboardSession]:
        return self._sessions.get(uid)

    def open(self, uid: str) -> DashboardSession:
        with self._lock:
            session = self._sessions.get(uid)
            if session is None:
                session = DashboardSession(self._tenant_factory(uid), clock=self._clock)
                self._sessions[uid] = session
        try:
            return session.open()
        except BackendError:
            with self._lock:
                if self._sessions.get(uid) is session:
                    del self._sessions[uid]
            raise

    def close(self, uid: str) -> None:
        with self._lock:
            session = self._sessions.pop(uid, None)
        if session is not None:
            session.close()

    def close_all(self) -> None:
        with self._lock:
            sessions, self._sessions = list(self._sessions.values()), {}
        for session in sessions:
            session.close()

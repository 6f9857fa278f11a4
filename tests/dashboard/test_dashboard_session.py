from __future__ import annotations

import threading
from datetime import timedelta
from types import SimpleNamespace

import pytest

from src.pharmacy_ops.pharmacy_ops.container import build_container
from src.pharmacy_ops.pharmacy_ops.core.enums import AttendanceStatus, LeaveType
from src.pharmacy_ops.pharmacy_ops.dashboard.session import DashboardSession


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


class CloseFirstLock:
    """Lock that lets a pending close() land right before the caller gets in."""

    def __init__(self, session: DashboardSession):
        self._inner = threading.Lock()
        self._session = session
        self._armed = True

    def __enter__(self):
        if self._armed:
            self._armed = False
            self._session.close()
        return self._inner.__enter__()

    def __exit__(self, *exc):
        return self._inner.__exit__(*exc)


@pytest.fixture
def clock(fixed_now):
    return Clock(fixed_now)


def _listeners(records, scope) -> dict:
    return {
        name: records.listener_count(getattr(scope, name))
        for name in ("licenses", "staff", "leave_records", "attendance")
    }


def test_open_subscribes_and_close_releases_everything(tenant, records, clock):
    session = DashboardSession(tenant, clock=clock).open()

    assert _listeners(records, tenant.scope) == {"licenses": 1, "staff": 1, "leave_records": 1, "attendance": 1}

    session.close()
    session.close()

    assert not session.is_open
    assert set(_listeners(records, tenant.scope).values()) == {0}


def test_open_twice_does_not_duplicate_subscriptions(tenant, records, clock):
    session = DashboardSession(tenant, clock=clock)
    session.open()
    session.open()

    assert records.listener_count(tenant.scope.licenses) == 1
    session.close()


def test_session_state_follows_writes(tenant, clock, fixed_now):
    session = DashboardSession(tenant, clock=clock).open()

    tenant.license_service.add_license(name="Drug License", expiry_date=(fixed_now + timedelta(days=5)).date())
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store", total_cl=1)
    tenant.leave_service.record_leave(staff_id=staff_id, leave_type="CL", start_date="2024-06-10", end_date="2024-06-10")
    tenant.attendance_service.mark(staff_id, "Absent", now=fixed_now)

    view = session.view()

    assert [lic.name for lic in session.licenses] == ["Drug License"]
    assert view.expiring_soon_count == 1 and view.expired_count == 0
    assert view.alerts[0].message.startswith('"Drug License" will expire on')
    assert view.leave_balances[0].balances[LeaveType.CL].balance == 0
    assert [(r.staff_name, r.status) for r in view.attendance] == [("Asha", AttendanceStatus.ABSENT)]
    session.close()


def test_view_reclassifies_as_the_clock_moves(tenant, clock, fixed_now):
    tenant.license_service.add_license(name="Drug License", expiry_date=(fixed_now + timedelta(days=40)).date())
    session = DashboardSession(tenant, clock=clock).open()

    assert session.view().expiring_soon_count == 0

    clock.now = fixed_now + timedelta(days=15)
    assert session.view().expiring_soon_count == 1

    clock.now = fixed_now + timedelta(days=41)
    assert session.view().expired_count == 1
    session.close()


def test_attendance_rolls_over_to_the_new_day(tenant, records, clock, fixed_now):
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store")
    tenant.attendance_service.mark(staff_id, "Present", now=fixed_now)
    session = DashboardSession(tenant, clock=clock).open()
    assert session.view().attendance_summary["Present"] == 1

    clock.now = fixed_now + timedelta(days=1)
    view = session.view()

    assert view.today == tenant.attendance_service.today(clock.now)
    assert view.attendance_summary == {"Present": 0, "Absent": 0, "On Leave": 0, "Not Marked": 1}
    assert records.listener_count(tenant.scope.attendance) == 1

    tenant.attendance_service.mark(staff_id, "On Leave", now=clock.now)
    assert session.attendance.status_for(staff_id) == AttendanceStatus.ON_LEAVE
    session.close()


def test_orphans_are_reported_separately(tenant, clock, fixed_now):
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store")
    tenant.leave_service.record_leave(staff_id=staff_id, leave_type="SL", start_date="2024-06-10", end_date="2024-06-10")
    tenant.attendance_service.mark(staff_id, "Present", now=fixed_now)
    session = DashboardSession(tenant, clock=clock).open()

    tenant.staff_service.delete_staff(staff_id, confirmed=True)
    view = session.view()

    assert view.leave_balances == ()
    assert [r.staff_id for r in view.orphaned_leave] == [staff_id]
    assert view.orphaned_attendance == (staff_id,)
    assert view.attendance == ()
    session.close()


def test_registry_follows_sign_in_and_sign_out():
    settings = SimpleNamespace(BACKEND="memory", APP_ID="test-app")
    container = build_container(settings=settings)

    user = container.identity.sign_up("owner@example.com", "secret123")
    session = container.sessions.get(user.uid)
    assert session is not None and session.is_open
    assert container.records.listener_count(container.tenant(user.uid).scope.licenses) == 1

    container.identity.sign_out(user.uid)

    assert container.sessions.get(user.uid) is None
    assert not session.is_open
    assert container.records.listener_count(container.tenant(user.uid).scope.licenses) == 0


def test_tenants_are_isolated(tenant_factory, clock, fixed_now):
    first = tenant_factory("owner-1")
    second = tenant_factory("owner-2")
    first.license_service.add_license(name="Drug License", expiry_date=(fixed_now + timedelta(days=5)).date())

    session = DashboardSession(second, clock=clock).open()

    assert session.licenses == ()
    assert session.view().alerts == ()
    session.close()


def test_view_racing_close_does_not_resubscribe(tenant, records, clock, fixed_now):
    session = DashboardSession(tenant, clock=clock).open()
    clock.now = fixed_now + timedelta(days=1)
    session._lock = CloseFirstLock(session)

    view = session.view()

    assert not session.is_open
    assert records.listener_count(tenant.scope.attendance) == 0
    assert view.today == tenant.attendance_service.today(clock.now)

"""Example: drive the service layer directly (no Flask).

Runs against the in-memory backend: creates an account, adds a license and a
staff member, files a leave, marks attendance and prints the dashboard view.
"""

from datetime import timedelta

from config import testing

from src.pharmacy_ops.pharmacy_ops.common.datetime_utils import now_utc
from src.pharmacy_ops.pharmacy_ops.container import build_container


def main():
    container = build_container(settings=testing)
    user = container.identity.sign_up("owner@example.com", "secret123")
    tenant = container.tenant(user.uid)

    now = now_utc()
    tenant.license_service.add_license(
        name="Drug License",
        expiry_date=(now + timedelta(days=10)).date().isoformat(),
        license_number="DL-2041",
    )
    staff_id = tenant.staff_service.add_staff(name="Asha", store="Main Store", total_cl=2, total_sl=2, total_el=5)
    tenant.leave_service.record_leave(
        staff_id=staff_id,
        leave_type="CL",
        start_date=now.date().isoformat(),
        end_date=now.date().isoformat(),
        reason="Family function",
    )
    tenant.attendance_service.mark(staff_id, "Present", now=now)

    view = container.sessions.get(user.uid).view(now)
    for alert in view.alerts:
        print(alert.message)
    for row in view.leave_balances:
        print(row.staff_name, {t.value: b.balance for t, b in row.balances.items()})
    print(view.attendance_summary)

    container.identity.sign_out(user.uid)


if __name__ == "__main__":
    main()

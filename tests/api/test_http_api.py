from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone


def _sign_up(client, email="owner@example.com"):
    response = client.post("/auth/sign-up", json={"email": email, "password": "secret123"})
    assert response.status_code == 201
    return response.get_json()["user"]


def _in_days(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).date().isoformat()


def test_api_requires_sign_in(client):
    response = client.get("/api/licenses")

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "message": "Please sign in to continue"}


def test_sign_in_with_bad_credentials(client):
    _sign_up(client)
    client.post("/auth/sign-out")

    response = client.post("/auth/sign-in", json={"email": "owner@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid email or password"


def test_password_reset_requires_email(client):
    response = client.post("/auth/password-reset", json={"email": ""})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Please enter your email address to reset your password."


def test_license_flow_and_dashboard(client):
    user = _sign_up(client)
    assert client.get("/auth/me").get_json()["user"]["uid"] == user["uid"]

    created = client.post(
        "/api/licenses",
        data={"name": "Drug License", "expiry_date": _in_days(5), "file": (io.BytesIO(b"%PDF"), "permit.pdf")},
        content_type="multipart/form-data",
    )
    assert created.status_code == 201
    license_id = created.get_json()["license_id"]

    [lic] = client.get("/api/licenses?q=drug").get_json()["licenses"]
    assert lic["file_name"] == "permit.pdf"

    dashboard = client.get("/api/dashboard").get_json()["dashboard"]
    assert dashboard["expiring_soon_count"] == 1
    assert dashboard["alerts"][0]["state"] == "expiring_soon"

    renewed = client.post(f"/api/licenses/{license_id}/renew", json={"expiry_date": _in_days(365)})
    assert renewed.status_code == 200
    assert client.get("/api/dashboard").get_json()["dashboard"]["alerts"] == []


def test_license_validation_message(client):
    _sign_up(client)

    response = client.post("/api/licenses", json={"name": "Drug License", "expiry_date": "tomorrow"})

    assert response.status_code == 400
    assert response.get_json()["message"] == "Invalid date format."


def test_delete_asks_for_confirmation(client):
    _sign_up(client)
    license_id = client.post("/api/licenses", json={"name": "Drug License", "expiry_date": _in_days(90)}).get_json()[
        "license_id"
    ]

    unconfirmed = client.delete(f"/api/licenses/{license_id}")
    assert unconfirmed.status_code == 409
    assert unconfirmed.get_json()["confirm_required"] is True

    assert client.delete(f"/api/licenses/{license_id}?confirm=1").status_code == 200
    assert client.delete(f"/api/licenses/{license_id}?confirm=1").status_code == 404


def test_staff_leave_and_attendance(client):
    _sign_up(client)
    staff_id = client.post(
        "/api/staff", json={"name": "Asha", "store": "Main Store", "total_cl": 1}
    ).get_json()["staff_id"]

    leave = client.post(
        "/api/leave",
        json={"staff_id": staff_id, "leave_type": "CL", "start_date": "2024-06-03", "end_date": "2024-06-03"},
    )
    assert leave.status_code == 201

    [balance] = client.get("/api/leave/balances").get_json()["balances"]
    assert balance["balances"]["CL"] == {"total": 1, "taken": 1, "balance": 0}

    assert client.put(f"/api/attendance/{staff_id}", json={"status": "Present"}).status_code == 200
    today = client.get("/api/attendance/today").get_json()
    assert today["rows"][0]["status"] == "Present"
    assert today["summary"]["Present"] == 1

    bad = client.put(f"/api/attendance/{staff_id}", json={"status": "Late"})
    assert bad.status_code == 400


def test_tenants_do_not_see_each_other(app):
    first, second = app.test_client(), app.test_client()
    _sign_up(first, "first@example.com")
    _sign_up(second, "second@example.com")

    first.post("/api/licenses", json={"name": "Drug License", "expiry_date": _in_days(5)})

    assert second.get("/api/licenses").get_json()["licenses"] == []
    assert second.get("/api/licenses").get_json()["empty_message"] == "No licenses added yet."


def test_csv_reports(client):
    _sign_up(client)

    empty = client.get("/api/reports/licenses.csv")
    assert empty.status_code == 400
    assert empty.get_json()["message"] == "Nothing to export"

    client.post("/api/licenses", json={"name": 'Drug "Retail", License', "expiry_date": _in_days(5)})
    response = client.get("/api/reports/licenses.csv")

    assert response.status_code == 200
    assert response.headers["Content-Disposition"].startswith("attachment; filename=licenses_")
    assert response.data.startswith(b"\xef\xbb\xbf")
    assert '"Drug ""Retail"", License"' in response.data.decode("utf-8-sig")

    assert client.get("/api/reports/unknown.csv").status_code == 404


def test_sign_out_closes_the_live_session(app, client):
    user = _sign_up(client)
    sessions = app.extensions["pharmacy_ops"].sessions
    assert sessions.get(user["uid"]) is not None

    client.post("/auth/sign-out")

    assert sessions.get(user["uid"]) is None
    assert client.get("/api/dashboard").status_code == 401


def test_form_edit_with_blank_entitlement_keeps_it(client):
    _sign_up(client)
    staff_id = client.post("/api/staff", json={"name": "Asha", "store": "Main Store", "total_cl": 5}).get_json()[
        "staff_id"
    ]

    edited = client.patch(f"/api/staff/{staff_id}", data={"name": "Asha K", "total_cl": ""})

    assert edited.status_code == 200
    [member] = client.get("/api/staff").get_json()["staff"]
    assert (member["name"], member["total_cl"]) == ("Asha K", 5)


def test_testing_apps_do_not_register_exit_hooks(monkeypatch):
    import atexit

    from src.pharmacy_ops.pharmacy_ops.main import create_app

    registered = []
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(atexit, "register", registered.append)

    app = create_app()
    app.extensions["pharmacy_ops"].sessions.close_all()

    assert app.config["TESTING"] is True
    assert registered == []

from datetime import date, timedelta

import pytest

from leave_portal.core.constants import REPORT_MEDIA_TYPE
from leave_portal.utils.date_utils import today_local

API = "/api/v1"


def leave_payload(day, leave_type="Annual Leave", leave_time="Full Day", purpose="Holiday"):
    return {
        "leave_type": leave_type,
        "leave_purpose": purpose,
        "leave_time": leave_time,
        "leave_date": day,
    }


@pytest.fixture
def alice(auth_headers):
    return auth_headers("alice@example.com")


@pytest.fixture
def bob(auth_headers):
    return auth_headers("bob@example.com")


@pytest.fixture
def admin(auth_headers):
    return auth_headers("admin@example.com")


def test_health(client):
    response = client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.json()["database"] == "ok"
    assert "X-Request-ID" in response.headers


def test_sign_in_errors_are_user_visible(client, users):
    unknown = client.post(f"{API}/auth/signin", json={"email": "x@example.com", "password": "pw"})
    wrong = client.post(f"{API}/auth/signin", json={"email": "alice@example.com", "password": "nope"})

    assert unknown.status_code == 401
    assert unknown.json()["error"]["message"] == "User not found"
    assert wrong.status_code == 401
    assert wrong.json()["error"]["message"] == "Invalid password"


def test_me_dispatches_by_role(client, admin, alice):
    assert client.get(f"{API}/auth/me").json()["view"] == "signin"
    assert client.get(f"{API}/auth/me", headers=admin).json()["view"] == "admin"
    me = client.get(f"{API}/auth/me", headers=alice).json()
    assert me["view"] == "employee"
    assert me["user"]["full_name"] == "Alice Smith"
    assert "password_hash" not in me["user"]


def test_sign_out_invalidates_token(client, alice):
    assert client.post(f"{API}/auth/signout", headers=alice).json() == {"signed_out": True}

    assert client.get(f"{API}/leaves/mine", headers=alice).status_code == 401
    assert client.get(f"{API}/auth/me", headers=alice).json()["view"] == "signin"


def test_protected_routes_need_a_token(client, users):
    assert client.get(f"{API}/leaves/mine").status_code == 401
    assert client.get(f"{API}/admin/dashboard").status_code == 401
    bogus = {"Authorization": "Bearer not-a-token"}
    assert client.get(f"{API}/leaves/mine", headers=bogus).status_code == 401


def test_employee_leave_lifecycle(client, alice):
    created = client.post(f"{API}/leaves", json=leave_payload("2025-03-04"), headers=alice)
    assert created.status_code == 200
    leave = created.json()
    assert leave["status"] == "Pending"
    assert leave["employee_name"] == "Alice Smith"

    edited = client.put(
        f"{API}/leaves/{leave['id']}",
        json=leave_payload("2025-03-05", "Medical Leave", "Half Day", "Doctor"),
        headers=alice,
    )
    assert edited.status_code == 200
    assert edited.json()["leave_date"] == "2025-03-05"
    assert edited.json()["leave_time"] == "Half Day"

    mine = client.get(f"{API}/leaves/mine", headers=alice).json()
    assert [l["id"] for l in mine] == [leave["id"]]

    calendar = client.get(f"{API}/leaves/mine/calendar", headers=alice).json()
    assert calendar[0]["color"] == "rgba(239, 68, 68, 0.2)"

    assert client.delete(f"{API}/leaves/{leave['id']}", headers=alice).json() == {"deleted": True}
    assert client.get(f"{API}/leaves/mine", headers=alice).json() == []


def test_incomplete_submission_saves_nothing(client, alice):
    response = client.post(f"{API}/leaves", json={"leave_type": "Annual Leave"}, headers=alice)

    assert response.status_code == 200
    assert response.json() is None
    assert client.get(f"{API}/leaves/mine", headers=alice).json() == []


def test_employees_cannot_edit_each_others_leaves(client, alice, bob):
    leave = client.post(f"{API}/leaves", json=leave_payload("2025-03-04"), headers=alice).json()

    assert client.put(f"{API}/leaves/{leave['id']}", json=leave_payload("2025-03-06"), headers=bob).status_code == 403
    assert client.delete(f"{API}/leaves/{leave['id']}", headers=bob).status_code == 403
    assert client.delete(f"{API}/leaves/unknown-id", headers=bob).status_code == 404


def test_admin_routes_reject_employees(client, alice):
    for path in ("/admin/leaves", "/admin/dashboard", "/admin/availability", "/admin/notifications"):
        assert client.get(f"{API}{path}", headers=alice).status_code == 403
    assert client.patch(
        f"{API}/admin/leaves/some-id/status", json={"status": "Approved"}, headers=alice
    ).status_code == 403


def test_admin_listing_review_and_dashboard(client, admin, alice, bob):
    for headers, day in ((alice, "2025-03-03"), (bob, "2025-03-05"), (alice, "2025-03-12")):
        client.post(f"{API}/leaves", json=leave_payload(day), headers=headers)

    listing = client.get(
        f"{API}/admin/leaves",
        params={"search": "aLiCe", "date_from": "2025-03-01", "date_to": "2025-03-31"},
        headers=admin,
    ).json()
    assert [item["leave_date"] for item in listing["items"]] == ["2025-03-03", "2025-03-12"]
    assert listing["meta"]["total_items"] == 2
    assert listing["meta"]["page_size"] == 10

    leave_id = listing["items"][0]["id"]
    approved = client.patch(f"{API}/admin/leaves/{leave_id}/status", json={"status": "Approved"}, headers=admin)
    assert approved.json()["status"] == "Approved"
    pending = client.patch(f"{API}/admin/leaves/{leave_id}/status", json={"status": "Pending"}, headers=admin)
    assert pending.status_code == 422
    missing = client.patch(f"{API}/admin/leaves/nope/status", json={"status": "Rejected"}, headers=admin)
    assert missing.status_code == 404

    stats = client.get(f"{API}/admin/dashboard", headers=admin).json()
    assert stats["total_employees"] == 3


def test_admin_availability_uses_camel_case(client, admin, alice):
    client.post(f"{API}/leaves", json=leave_payload("2025-03-04", leave_time="Half Day"), headers=alice)

    week = client.get(f"{API}/admin/availability", params={"week_of": "2025-03-03"}, headers=admin).json()

    assert [day["date"] for day in week["days"]] == [f"2025-03-0{n}" for n in range(3, 8)]
    tuesday = week["days"][1]
    assert tuesday["halfDayEmployees"] == ["Alice Smith"]
    assert tuesday["availableEmployees"] == ["Bob Jones"]
    assert tuesday["availableCount"] == 1
    assert tuesday["onLeaveCount"] == 1


def test_admin_availability_defaults_to_next_week(client, admin):
    week = client.get(f"{API}/admin/availability", headers=admin).json()

    next_week = today_local() + timedelta(days=7)
    monday = next_week - timedelta(days=next_week.weekday())
    assert week["weekStart"] == monday.isoformat()
    assert len(week["days"]) == 5


def test_admin_export(client, admin, alice):
    client.post(f"{API}/leaves", json=leave_payload("2025-03-04"), headers=alice)

    missing_range = client.get(f"{API}/admin/leaves/export", headers=admin)
    assert missing_range.status_code == 400
    assert missing_range.json()["error"]["message"] == "Please select a date range before exporting"

    export = client.get(
        f"{API}/admin/leaves/export",
        params={"date_from": "2025-03-01", "date_to": "2025-03-31"},
        headers=admin,
    )
    assert export.status_code == 200
    assert export.headers["content-type"] == REPORT_MEDIA_TYPE
    assert "leave_report_2025-03-01_to_2025-03-31.xlsx" in export.headers["content-disposition"]
    assert export.content[:2] == b"PK"


def test_admin_notifications(client, admin, alice):
    client.post(f"{API}/leaves", json=leave_payload(date(2025, 3, 4).isoformat()), headers=alice)

    feed = client.get(f"{API}/admin/notifications", headers=admin).json()

    assert feed["count"] == 1
    assert feed["items"][0]["employee_name"] == "Alice Smith"

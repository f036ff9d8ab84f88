"""User management: Admin role only."""

import pytest

from autoshop.rbac import Role

pytestmark = pytest.mark.api

NEW_USER = {
    "name": "Nina Patel",
    "email": "nina@autoshop.com",
    "password": "nina1234",
    "role": "Sales Executive",
}


def test_anonymous_gets_401(client):
    assert client.post("/api/users", json=NEW_USER).status_code == 401
    assert client.get("/api/users").status_code == 401


@pytest.mark.parametrize(
    "role",
    [Role.INVENTORY_MANAGER, Role.SALES_EXECUTIVE, Role.HR_MANAGER, Role.SERVICE_STAFF],
)
def test_non_admins_get_403(login_as, role):
    user = login_as(role)
    resp = user.post("/api/users", json=NEW_USER)
    assert resp.status_code == 403
    assert resp.json() == {"error": "Insufficient permissions"}


def test_admin_creates_lists_and_updates_users(login_as):
    admin = login_as(Role.ADMIN)

    created = admin.post("/api/users", json=NEW_USER)
    assert created.status_code == 200
    user = created.json()
    assert user["role"] == "Sales Executive"
    assert "password_hash" not in user

    emails = [u["email"] for u in admin.get("/api/users").json()]
    assert set(emails) == {"admin@autoshop.com", "nina@autoshop.com"}

    patched = admin.patch(f"/api/users/{user['id']}", json={"role": "HR Manager", "is_active": False})
    assert patched.status_code == 200
    assert patched.json()["role"] == "HR Manager"
    assert patched.json()["is_active"] is False


def test_duplicate_email_is_400_and_first_account_untouched(login_as):
    admin = login_as(Role.ADMIN)
    first = admin.post("/api/users", json=NEW_USER).json()

    dup = admin.post("/api/users", json={**NEW_USER, "name": "Someone Else", "role": "Admin"})

    assert dup.status_code == 400
    assert dup.json() == {"error": "User already exists"}
    users = {u["email"]: u for u in admin.get("/api/users").json()}
    assert users["nina@autoshop.com"] == first


def test_invalid_role_or_short_password_is_400(login_as):
    admin = login_as(Role.ADMIN)
    assert admin.post("/api/users", json={**NEW_USER, "role": "Superuser"}).status_code == 400
    assert admin.post("/api/users", json={**NEW_USER, "password": "123"}).status_code == 400


def test_admin_cannot_delete_self(login_as):
    admin = login_as(Role.ADMIN)
    resp = admin.delete(f"/api/users/{admin.account.id}")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Cannot delete your own account"}


def test_admin_cannot_delete_self_via_uppercase_id(login_as):
    admin = login_as(Role.ADMIN)

    resp = admin.delete(f"/api/users/{admin.account.id.upper()}")

    assert resp.status_code == 400
    assert resp.json() == {"error": "Cannot delete your own account"}
    assert admin.get("/api/auth/me").status_code == 200


def test_admin_deletes_other_user(login_as):
    admin = login_as(Role.ADMIN)
    other = admin.post("/api/users", json=NEW_USER).json()

    resp = admin.delete(f"/api/users/{other['id']}")

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert admin.delete(f"/api/users/{other['id']}").status_code == 404


def test_deactivated_user_cannot_log_in(login_as, client):
    admin = login_as(Role.ADMIN)
    user = admin.post("/api/users", json=NEW_USER).json()
    admin.patch(f"/api/users/{user['id']}", json={"is_active": False})

    resp = client.post("/api/auth/login", json={"email": NEW_USER["email"], "password": NEW_USER["password"]})
    assert resp.status_code == 401


def test_activity_log_is_admin_only(login_as):
    admin = login_as(Role.ADMIN)
    hr = login_as(Role.HR_MANAGER)

    assert hr.get("/api/activity-logs").status_code == 403
    logs = admin.get("/api/activity-logs").json()
    assert {entry["action"] for entry in logs} == {"login"}

    posted = hr.post("/api/activity-logs", json={"action": "export", "resource": "report"})
    assert posted.status_code == 200
    assert posted.json()["user_role"] == "HR Manager"

"""Guard functions, exercised without HTTP."""

import pytest
from fastapi import HTTPException

from autoshop.rbac import (
    DEFAULT_PERMISSION_TABLE,
    Action,
    Identity,
    Resource,
    Role,
    check_permission,
    check_role,
    ensure_authenticated,
    require_permission,
)

pytestmark = pytest.mark.unit


def _identity(role: Role) -> Identity:
    return Identity(user_id="u1", role=role, name="Test", email="t@example.com")


def test_anonymous_is_401_everywhere():
    for call in (
        lambda: ensure_authenticated(None),
        lambda: check_role(None, [Role.ADMIN]),
        lambda: check_permission(DEFAULT_PERMISSION_TABLE, None, Resource.PRODUCTS, Action.READ),
    ):
        with pytest.raises(HTTPException) as exc:
            call()
        assert exc.value.status_code == 401
        assert exc.value.detail == "Authentication required"


def test_role_guard_passes_matching_role_through():
    admin = _identity(Role.ADMIN)
    assert check_role(admin, [Role.ADMIN]) is admin
    assert check_role(admin, ["Admin"]) is admin


def test_role_guard_rejects_other_roles():
    with pytest.raises(HTTPException) as exc:
        check_role(_identity(Role.HR_MANAGER), [Role.ADMIN])
    assert exc.value.status_code == 403
    assert exc.value.detail == "Insufficient permissions"


def test_permission_guard_allows_granted_pair():
    staff = _identity(Role.SERVICE_STAFF)
    assert check_permission(DEFAULT_PERMISSION_TABLE, staff, Resource.ORDERS, Action.UPDATE) is staff


def test_permission_guard_rejects_ungranted_pair():
    with pytest.raises(HTTPException) as exc:
        check_permission(
            DEFAULT_PERMISSION_TABLE, _identity(Role.SERVICE_STAFF), Resource.ORDERS, Action.DELETE
        )
    assert exc.value.status_code == 403
    assert exc.value.detail == "Insufficient permissions for this action"


def test_require_permission_rejects_unknown_names_at_registration():
    with pytest.raises(ValueError):
        require_permission("invoices", "read")
    with pytest.raises(ValueError):
        require_permission(Resource.PRODUCTS, "approve")


def test_identity_round_trips_through_session_data():
    ident = _identity(Role.SALES_EXECUTIVE)
    data = ident.to_session()
    assert data["role"] == "Sales Executive"
    assert Identity.from_session(data) == ident


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"user_id": "u1"},
        {"user_id": "u1", "role": "Superuser", "name": "x", "email": "y"},
    ],
)
def test_unusable_session_data_gives_no_identity(data):
    assert Identity.from_session(data) is None

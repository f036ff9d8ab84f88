"""AuthService: credential checks, enumeration resistance, account creation."""

from unittest.mock import patch

import pytest
from fastapi import HTTPException

from autoshop.auth import AccountRepository, AuthService, verify_password
from autoshop.rbac import Role

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


@pytest.fixture
def svc(db):
    return AuthService(AccountRepository(db))


async def test_authenticate_returns_identity_for_valid_credentials(svc):
    account = await svc.create_account("hr@autoshop.com", "hr123", "HR Manager", Role.HR_MANAGER)

    identity = await svc.authenticate("hr@autoshop.com", "hr123")

    assert identity.user_id == account.id
    assert identity.role is Role.HR_MANAGER
    assert identity.email == "hr@autoshop.com"


async def test_wrong_password_and_unknown_email_fail_identically(svc):
    await svc.create_account("sales@autoshop.com", "sales123", "Sales", Role.SALES_EXECUTIVE)

    with pytest.raises(HTTPException) as wrong_pw:
        await svc.authenticate("sales@autoshop.com", "nope")
    with pytest.raises(HTTPException) as unknown:
        await svc.authenticate("ghost@autoshop.com", "sales123")

    assert wrong_pw.value.status_code == unknown.value.status_code == 401
    assert wrong_pw.value.detail == unknown.value.detail == "Invalid credentials"


async def test_unknown_email_still_spends_a_hash_check(svc):
    with patch("autoshop.auth.service.dummy_verify") as dummy:
        with pytest.raises(HTTPException):
            await svc.authenticate("ghost@autoshop.com", "whatever")
    dummy.assert_called_once()


async def test_inactive_account_cannot_log_in(svc):
    account = await svc.create_account("old@autoshop.com", "pw1234", "Old", Role.SERVICE_STAFF)
    await svc.accounts.update(account.id, {"is_active": False})

    with pytest.raises(HTTPException) as exc:
        await svc.authenticate("old@autoshop.com", "pw1234")
    assert exc.value.detail == "Invalid credentials"


async def test_duplicate_email_is_rejected(svc):
    await svc.create_account("admin@autoshop.com", "admin123", "Admin", Role.ADMIN)

    with pytest.raises(HTTPException) as exc:
        await svc.create_account("admin@autoshop.com", "other1", "Other", Role.HR_MANAGER)
    assert exc.value.status_code == 400
    assert exc.value.detail == "User already exists"


async def test_password_is_stored_hashed(svc):
    account = await svc.create_account("inv@autoshop.com", "inventory123", "Inv", "Inventory Manager")

    assert account.password_hash != "inventory123"
    assert account.password_hash.startswith("$2")
    assert verify_password("inventory123", account.password_hash)
    assert account.role is Role.INVENTORY_MANAGER


async def test_unknown_role_is_rejected_before_storage(svc):
    with pytest.raises(ValueError):
        await svc.create_account("x@autoshop.com", "pw1234", "X", "Superuser")
    assert await svc.accounts.find_by_email("x@autoshop.com") is None

import pytest

from autoshop.auth import AccountRepository, AuthService
from autoshop.rbac import Role
from autoshop.seed import DEFAULT_ACCOUNTS, seed_default_accounts

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


async def test_seed_creates_one_account_per_role_and_is_idempotent(db):
    svc = AuthService(AccountRepository(db))

    first = await seed_default_accounts(svc)
    second = await seed_default_accounts(svc)

    assert all(created for _, created in first)
    assert not any(created for _, created in second)
    accounts = await svc.accounts.list()
    assert {a.role for a in accounts} == set(Role)
    assert len(accounts) == len(DEFAULT_ACCOUNTS)


async def test_seeded_admin_can_authenticate(db):
    svc = AuthService(AccountRepository(db))
    await seed_default_accounts(svc)

    identity = await svc.authenticate("admin@autoshop.com", "admin123")
    assert identity.role is Role.ADMIN

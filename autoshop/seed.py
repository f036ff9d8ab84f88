"""
Provision the default role accounts.

    python -m autoshop.seed

Idempotent: accounts whose email already exists are left untouched.
Refuses to run when ENVIRONMENT=production, since the passwords are
well known.
"""

import asyncio
import sys

from autoshop.auth import AccountRepository, AuthService
from autoshop.config import db_manager, settings
from autoshop.rbac import Role
from autoshop.utils import Logger, set_log_level

logger = Logger("seed")

DEFAULT_ACCOUNTS = (
    {"email": "admin@autoshop.com", "password": "admin123", "name": "Admin User", "role": Role.ADMIN},
    {"email": "inventory@autoshop.com", "password": "inventory123", "name": "Inventory Manager", "role": Role.INVENTORY_MANAGER},
    {"email": "sales@autoshop.com", "password": "sales123", "name": "Sales Executive", "role": Role.SALES_EXECUTIVE},
    {"email": "hr@autoshop.com", "password": "hr123", "name": "HR Manager", "role": Role.HR_MANAGER},
    {"email": "service@autoshop.com", "password": "service123", "name": "Service Staff", "role": Role.SERVICE_STAFF},
)


async def seed_default_accounts(svc: AuthService) -> list[tuple[str, bool]]:
    """Returns (email, created) for every default account."""
    results = []
    for spec in DEFAULT_ACCOUNTS:
        if await svc.accounts.find_by_email(spec["email"]):
            logger.info(f"{spec['role'].value} - {spec['email']} (already exists)")
            results.append((spec["email"], False))
            continue
        await svc.create_account(spec["email"], spec["password"], spec["name"], spec["role"])
        logger.info(f"{spec['role'].value} - {spec['email']} (created)")
        results.append((spec["email"], True))
    return results


async def main() -> int:
    set_log_level(settings.log_level)
    if settings.environment == "production":
        logger.error("Refusing to seed default accounts in production")
        return 1

    await db_manager.connect()
    try:
        svc = AuthService(AccountRepository(db_manager.database))
        await seed_default_accounts(svc)
    finally:
        db_manager.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

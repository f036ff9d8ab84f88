"""Authentication service: credential checks and account creation."""

from fastapi import Depends

from autoshop.rbac import Identity, Role
from autoshop.utils import Logger
from autoshop.utils.exceptions import DuplicateEmail, InvalidCredentials

from .accounts import Account, AccountRepository, get_account_repository
from .helpers import dummy_verify, hash_password, verify_password

logger = Logger("auth")


class AuthService:
    def __init__(self, accounts: AccountRepository):
        self.accounts = accounts

    async def authenticate(self, email: str, password: str) -> Identity:
        """
        Return the Identity for an active account whose password matches.

        Unknown email, inactive account and wrong password all raise the
        same InvalidCredentials, and all three pay for one bcrypt check.
        """
        account = await self.accounts.find_by_email(email)
        if account is None or not account.is_active:
            dummy_verify()
            raise InvalidCredentials()

        if not verify_password(password, account.password_hash):
            raise InvalidCredentials()

        return Identity(
            user_id=account.id,
            role=account.role,
            name=account.name,
            email=account.email,
        )

    async def create_account(
        self, email: str, password: str, name: str, role: Role | str
    ) -> Account:
        """Hash the password and store a new active account. Emails are unique."""
        if await self.accounts.find_by_email(email):
            raise DuplicateEmail()

        account = await self.accounts.create(
            {
                "email": email,
                "password_hash": hash_password(password),
                "name": name,
                "role": Role(role),
                "is_active": True,
            }
        )
        logger.info(f"Account created: {account.id} ({account.role.value})")
        return account


async def get_auth_service(
    accounts: AccountRepository = Depends(get_account_repository),
) -> AuthService:
    return AuthService(accounts)

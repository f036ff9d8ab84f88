from .accounts import Account, AccountRepository, get_account_repository
from .helpers import hash_password, verify_password
from .service import AuthService, get_auth_service
from .routes import auth_router

__all__ = [
    "Account",
    "AccountRepository",
    "get_account_repository",
    "hash_password",
    "verify_password",
    "AuthService",
    "get_auth_service",
    "auth_router",
]

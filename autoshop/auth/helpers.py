"""Low-level auth helpers: password hashing."""

from passlib.context import CryptContext

from autoshop.config import settings

# ── Password hashing ────────────────────────────────────────────
_pwd_ctx = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(plain: str) -> str:
    return _pwd_ctx.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return _pwd_ctx.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend a hash verification's worth of time when there is no account to check."""
    _pwd_ctx.dummy_verify()

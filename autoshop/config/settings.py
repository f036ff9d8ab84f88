from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # ── Application ──────────────────────────────────────────────
    app_name: str = "AutoShop Management"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # ── Database ─────────────────────────────────────────────────
    mongodb_uri: Optional[str] = "mongodb://localhost:27017"
    database_name: str = "autoshop"

    # ── Sessions ─────────────────────────────────────────────────
    session_cookie_name: str = "autoshop_sid"
    session_ttl_minutes: int = 1440  # 24 hours
    session_cookie_secure: bool = False
    session_cookie_samesite: str = "lax"
    session_backend: str = "mongo"  # "mongo" | "memory"

    # ── Security ─────────────────────────────────────────────────
    bcrypt_rounds: int = 10

    # ── CORS ─────────────────────────────────────────────────────
    cors_allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]
    cors_allow_credentials: bool = True
    cors_allowed_methods: list[str] = ["*"]
    cors_allowed_headers: list[str] = ["*"]

    # ── Business rules ───────────────────────────────────────────
    overdue_payment_days: int = 7
    notifications_limit: int = 50

    class Config:
        env_file = ".env"
        extra = "ignore"


# ── Module-level singleton ──────────────────────────────────────
settings = Settings()

"""
Shared fixtures.

  - db:            in-memory motor database (mongomock-motor)
  - stored:        read a collection back synchronously
  - session_store: MemorySessionStore
  - app / client:  FastAPI app wired to both, no MongoDB needed
  - make_account:  provision an account directly through AuthService
  - login_as:      TestClient already holding a session cookie for a role
"""

import asyncio
import os

# Cheap hashes and no .env surprises; must run before autoshop.config loads
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from autoshop.app import create_app  # noqa: E402
from autoshop.auth import AccountRepository, AuthService  # noqa: E402
from autoshop.config import get_database  # noqa: E402
from autoshop.rbac import Role  # noqa: E402
from autoshop.sessions import MemorySessionStore  # noqa: E402

DEFAULT_PASSWORD = "secret123"

ROLE_EMAILS = {
    Role.ADMIN: "admin@autoshop.com",
    Role.INVENTORY_MANAGER: "inventory@autoshop.com",
    Role.SALES_EXECUTIVE: "sales@autoshop.com",
    Role.HR_MANAGER: "hr@autoshop.com",
    Role.SERVICE_STAFF: "service@autoshop.com",
}


def pytest_configure(config) -> None:
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")


@pytest.fixture
def db():
    return AsyncMongoMockClient()["autoshop_test"]


@pytest.fixture
def stored(db):
    """Documents of a collection, for sync tests that check side effects."""

    def _read(name: str, query: dict | None = None) -> list[dict]:
        return asyncio.run(db[name].find(query or {}).to_list(None))

    return _read


@pytest.fixture
def session_store() -> MemorySessionStore:
    return MemorySessionStore(ttl_minutes=60)


@pytest.fixture
def app(db, session_store):
    application = create_app(session_store=session_store)

    async def _get_db():
        return db

    application.dependency_overrides[get_database] = _get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_service(db) -> AuthService:
    return AuthService(AccountRepository(db))


@pytest.fixture
def make_account(auth_service):
    """Create an account synchronously; returns the Account."""

    def _make(role: Role = Role.ADMIN, email: str | None = None, password: str = DEFAULT_PASSWORD, name: str | None = None):
        return asyncio.run(
            auth_service.create_account(
                email=email or ROLE_EMAILS[role],
                password=password,
                name=name or role.value,
                role=role,
            )
        )

    return _make


@pytest.fixture
def login_as(app, make_account):
    """TestClient logged in as a fresh account with the given role."""

    def _login(role: Role) -> TestClient:
        account = make_account(role)
        role_client = TestClient(app)
        resp = role_client.post(
            "/api/auth/login",
            json={"email": account.email, "password": DEFAULT_PASSWORD},
        )
        assert resp.status_code == 200, resp.text
        role_client.account = account
        return role_client

    return _login

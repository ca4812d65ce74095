"""Test fixtures — a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own SQLite in-memory engine (StaticPool keeps the
   single connection alive, so every session sees the same database).
2. The app's get_db dependency is overridden to hand out sessions bound
   to that engine.
3. Nothing overrides authentication: tests register and log in for real,
   and the httpx client's cookie jar carries the session cookie.

Environment variables are set before anything imports taskboard, because
the settings object is built once at import time.
"""

import os

os.environ.setdefault("TASKBOARD_ENVIRONMENT", "test")
os.environ.setdefault("TASKBOARD_DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault(
    "TASKBOARD_JWT_SECRET", "test-signing-secret-0123456789abcdef0123456789abcdef"
)
os.environ.setdefault("TASKBOARD_BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.exc import OperationalError  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from taskboard.db.engine import create_all, get_db  # noqa: E402
from taskboard.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    """A session for service-level tests."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def make_client(session_factory):
    """Factory for HTTP clients sharing one test database.

    Learn: Each client has its own cookie jar, so two clients behave like
    two different browsers — handy for cross-user ownership tests.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    clients: list[AsyncClient] = []

    def _make() -> AsyncClient:
        ac = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(ac)
        return ac

    yield _make

    for ac in clients:
        await ac.aclose()
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(make_client):
    """Anonymous client — no session until it registers or logs in."""
    return make_client()


@pytest.fixture
def register():
    """Register through the API; the client keeps the session cookie."""
    async def _register(
        client: AsyncClient,
        email: str,
        full_name: str = "Jane Doe",
        password: str = "secret1",
    ) -> dict:
        r = await client.post(
            "/api/v1/auth/register",
            json={
                "fullName": full_name,
                "email": email,
                "password": password,
                "confirmPassword": password,
            },
        )
        assert r.status_code == 201, r.text
        return r.json()["user"]

    return _register


class FailingSession:
    """Stands in for AsyncSession when the database is unreachable."""

    def __init__(self, reason: str = "connection refused"):
        self.reason = reason

    def _fail(self):
        raise OperationalError("SELECT", {}, ConnectionRefusedError(self.reason))

    async def execute(self, *args, **kwargs):
        self._fail()

    async def get(self, *args, **kwargs):
        self._fail()

    async def commit(self):
        self._fail()

    async def rollback(self):
        pass

    def add(self, instance):
        pass


@pytest.fixture
def database_down():
    """Point get_db at a session whose every query fails."""
    async def failing_get_db():
        yield FailingSession()

    def _break():
        app.dependency_overrides[get_db] = failing_get_db

    return _break

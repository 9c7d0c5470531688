"""Pytest configuration and fixtures for advisy.

Environment is set before any advisy module reads Settings. Repository and
service tests run against a fresh in-memory SQLite database (aiosqlite) per
test; HTTP tests use httpx ASGITransport with the DB dependencies overridden.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-advisy-rbac-tests")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

from collections.abc import AsyncIterator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from advisy.core.config import get_settings  # noqa: E402
from advisy.core.limiter import limiter  # noqa: E402
from advisy.infrastructure.persistence import models  # noqa: E402,F401
from advisy.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from advisy.infrastructure.security import create_access_token  # noqa: E402
from advisy.infrastructure.services import TenantInitializationService  # noqa: E402
from advisy.main import create_app  # noqa: E402

get_settings.cache_clear()

TENANT_ID = "tenant-alpha"
OTHER_TENANT_ID = "tenant-beta"
ADMIN_USER_ID = "user-admin"


class RecordingNotifier:
    """INotifier that keeps every (kind, message, context) it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def success(self, message: str, **context: Any) -> None:
        self.events.append(("success", message, context))

    def error(self, message: str, **context: Any) -> None:
        self.events.append(("error", message, context))

    @property
    def messages(self) -> list[tuple[str, str]]:
        return [(kind, message) for kind, message, _ in self.events]


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """Let SQLAlchemy own BEGIN so SAVEPOINT works with aiosqlite; enforce FKs."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory SQLite engine with the schema created from the models."""
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    _enable_sqlite_savepoints(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Database session for repository/service tests. Rolled back after the test."""
    async with AsyncSession(engine, expire_on_commit=False, autoflush=False) as session:
        yield session
        await session.rollback()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def auth_headers_for(user_id: str, tenant_id: str = TENANT_ID) -> dict[str, str]:
    """Bearer token for user_id plus the matching tenant header."""
    return {
        "Authorization": f"Bearer {create_access_token(user_id, tenant_id)}",
        get_settings().tenant_header_name: tenant_id,
    }


@pytest.fixture
def app(db_session: AsyncSession) -> FastAPI:
    """FastAPI app whose DB dependencies yield the per-test session."""
    application = create_app()

    async def _override_db() -> AsyncIterator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db] = _override_db
    application.dependency_overrides[get_db_transactional] = _override_db
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI). Rate limits are reset."""
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def seeded_tenant(db_session: AsyncSession) -> str:
    """Seed default roles for TENANT_ID and make ADMIN_USER_ID its admin."""
    service = TenantInitializationService(db_session)
    await service.initialize_default_roles(TENANT_ID)
    await service.assign_admin_role(TENANT_ID, ADMIN_USER_ID)
    return TENANT_ID


@pytest.fixture
def auth_headers(seeded_tenant: str) -> dict[str, str]:
    """Headers of the seeded tenant's admin."""
    return auth_headers_for(ADMIN_USER_ID, seeded_tenant)

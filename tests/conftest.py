"""Pytest configuration and fixtures for the space portal.

Environment is set before app.main is imported (create_app validates
settings at import). Repository and API tests run against an in-memory
SQLite database (aiosqlite) built from Base.metadata; the schema in
production comes from the Alembic migration.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-staff-tokens-0123456789")
os.environ.setdefault("PORTAL_SESSION_SECRET", "test-portal-session-secret-0123456789")
os.environ.setdefault("CREDENTIAL_ENCRYPTION_KEY", "0123456789abcdef0123456789abcdef")
os.environ.setdefault("PORTAL_SESSION_COOKIE_SECURE", "false")
os.environ.setdefault("STORAGE_SIGNING_SECRET", "test-storage-signing-secret")
os.environ.setdefault("EMAIL_BACKEND", "log")
os.environ.setdefault("APP_URL", "https://portal.example.com")

from collections.abc import AsyncIterator  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.api.v1.dependencies import get_session_scope  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.persistence import models  # noqa: E402,F401
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
)
from app.infrastructure.persistence.models import (  # noqa: E402
    Organization,
    Space,
    SpaceMember,
)
from app.infrastructure.security.jwt import create_access_token  # noqa: E402
from app.infrastructure.security.password import get_password_hash  # noqa: E402
from app.main import app  # noqa: E402
from app.shared.utils.datetime import utc_now  # noqa: E402


@pytest.fixture(autouse=True)
def _disable_rate_limits():
    """Per-IP limits would otherwise accumulate across tests sharing one client address."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Session on a fresh in-memory SQLite schema. Discarded after the test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app, sharing db_session with the test.

    Background tasks use the same session; ASGITransport runs them before
    the response is returned to the test.
    """

    async def _override_db() -> AsyncIterator[AsyncSession]:
        yield db_session
        await db_session.flush()

    def _override_session_scope():
        return asynccontextmanager(_override_db)

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_db_transactional] = _override_db
    app.dependency_overrides[get_session_scope] = _override_session_scope
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def organization(db_session: AsyncSession) -> Organization:
    org = Organization(name="Acme Onboarding", brand_color="#1f6feb", logo_path="orgs/acme.png")
    db_session.add(org)
    await db_session.flush()
    return org


@pytest.fixture
def make_space(db_session: AsyncSession, organization: Organization):
    """Factory inserting a space (and stakeholder rows) in the test organization."""

    async def _make(
        *,
        access_mode: str = "restricted",
        status: str = "active",
        password: str | None = None,
        require_email_for_analytics: bool = False,
        owner_email: str | None = "owner@acme.com",
        stakeholders: tuple[str, ...] = (),
        logo_path: str | None = None,
    ) -> Space:
        space = Space(
            organization_id=organization.id,
            name="Globex rollout",
            client_name="Globex",
            owner_email=owner_email,
            status=status,
            access_mode=access_mode,
            access_password_hash=get_password_hash(password) if password else None,
            require_email_for_analytics=require_email_for_analytics,
            logo_path=logo_path,
        )
        db_session.add(space)
        await db_session.flush()
        for email in stakeholders:
            db_session.add(
                SpaceMember(
                    space_id=space.id,
                    invited_email=email,
                    role="stakeholder",
                    invited_at=utc_now(),
                )
            )
        await db_session.flush()
        return space

    return _make


@pytest.fixture
def staff_headers(organization: Organization):
    """Bearer headers for a staff token scoped to the test organization."""

    def _headers(*, role: str = "owner", email: str = "owner@acme.com") -> dict[str, str]:
        token = create_access_token(
            {"sub": email, "email": email, "organization_id": organization.id, "role": role}
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers

"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session. ASGITransport does not run the app lifespan, so the
client fixture enters it explicitly to load the catalog and market state.
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.cc_common.database import engine
from src.main import app


def make_token(team_id: str, is_admin: bool = False, is_service: bool = False) -> str:
    return jwt.encode(
        {
            "sub": team_id,
            "type": "access",
            "is_admin": is_admin,
            "is_service": is_service,
            "exp": datetime.now(UTC) + timedelta(minutes=30),
        },
        settings.JWT_SECRET,
        algorithm="HS256",
    )


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client: keeps the engine pool alive."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM market_state LIMIT 1"))
    except (OSError, SQLAlchemyError) as e:
        pytest.skip(f"PostgreSQL not available or not migrated: {e}")

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest.fixture
def team_id() -> str:
    """A fresh team per test; its account opens on first use."""
    return f"team_{uuid.uuid4().hex[:8]}"


@pytest.fixture
def team_headers(team_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(team_id)}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token('admin', is_admin=True)}"}


@pytest.fixture
def service_headers() -> dict[str, str]:
    """The quiz/mini-game backend that grants rewards and penalties."""
    return {"Authorization": f"Bearer {make_token('quiz-svc', is_service=True)}"}

"""Verify the migrated schema carries the constraints the services rely on.

Requires running PostgreSQL migrated to head (alembic upgrade head).
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from config.settings import settings


def _make_session() -> AsyncSession:
    """Create a fresh session with NullPool to avoid event-loop binding."""
    engine = create_async_engine(settings.DATABASE_URL, poolclass=NullPool)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return factory()


async def _index_definition(name: str) -> str | None:
    try:
        async with _make_session() as db:
            result = await db.execute(
                text("SELECT indexdef FROM pg_indexes WHERE indexname = :name"),
                {"name": name},
            )
            row = result.fetchone()
    except (OSError, SQLAlchemyError) as e:
        pytest.skip(f"PostgreSQL not available or not migrated: {e}")
    return row.indexdef if row else None


async def test_reference_index_is_scoped_to_tx_type() -> None:
    indexdef = await _index_definition("uq_transactions_team_type_reference")
    assert indexdef is not None
    assert "UNIQUE" in indexdef
    assert "(team_id, tx_type, reference_id)" in indexdef
    assert "reference_id IS NOT NULL" in indexdef


async def test_transaction_log_newest_first_index() -> None:
    indexdef = await _index_definition("idx_transactions_team_id")
    assert indexdef is not None
    assert "id DESC" in indexdef

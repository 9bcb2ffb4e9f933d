# src/cc_admin/application/service.py
"""Admin application service: market controls for the single admin session.

Every operation returns its status message together with a refreshed
market snapshot.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_account.domain.repository import AccountRepositoryProtocol
from src.cc_account.infrastructure.persistence import AccountRepository
from src.cc_common.enums import MarketEvent
from src.cc_market.application.schemas import MarketActionResponse, MarketDataResponse
from src.cc_market.engine.engine import MarketEngine

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(self, account_repo: AccountRepositoryProtocol | None = None) -> None:
        self._account_repo: AccountRepositoryProtocol = account_repo or AccountRepository()

    async def advance_round(
        self, engine: MarketEngine, db: AsyncSession
    ) -> MarketActionResponse:
        message = await engine.advance_round(db)
        return _respond(engine, message)

    async def reset_market(
        self, engine: MarketEngine, db: AsyncSession
    ) -> MarketActionResponse:
        """Back to round 0 and clear ALL portfolios and admin overrides.
        Balances and transaction logs are kept."""
        deleted: list[int] = []

        async def wipe_holdings(session: AsyncSession) -> None:
            deleted.append(await self._account_repo.delete_all_holdings(session))

        message = await engine.reset(db, after_save=wipe_holdings)
        logger.warning("Market reset: %d holdings deleted", deleted[0] if deleted else 0)
        return _respond(engine, message)

    async def set_item_frozen(
        self, engine: MarketEngine, db: AsyncSession, item_id: str, frozen: bool
    ) -> MarketActionResponse:
        message = await engine.set_item_frozen(db, item_id, frozen)
        return _respond(engine, message)

    async def adjust_price(
        self, engine: MarketEngine, db: AsyncSession, item_id: str, extra_bps: int
    ) -> MarketActionResponse:
        message = await engine.adjust_price(db, item_id, extra_bps)
        return _respond(engine, message)

    async def trigger_event(
        self, engine: MarketEngine, db: AsyncSession, event: MarketEvent | None
    ) -> MarketActionResponse:
        message = await engine.trigger_event(db, event)
        return _respond(engine, message)

    async def freeze_market(
        self, engine: MarketEngine, db: AsyncSession, duration_minutes: int
    ) -> MarketActionResponse:
        message = await engine.freeze_market(db, duration_minutes)
        return _respond(engine, message)


def _respond(engine: MarketEngine, message: str) -> MarketActionResponse:
    return MarketActionResponse(
        message=message,
        market=MarketDataResponse.from_state(engine.state, engine.now()),
    )

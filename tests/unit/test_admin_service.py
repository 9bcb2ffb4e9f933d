"""Unit tests for AdminService: every action returns message + snapshot."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cc_admin.application.service import AdminService
from src.cc_common.enums import MarketEvent
from src.cc_common.errors import InvalidDurationError, RoundLimitReachedError
from src.cc_market.engine.engine import MarketEngine


@pytest.fixture
def account_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.delete_all_holdings.return_value = 3
    return repo


class TestAdminService:
    async def test_advance_round_returns_snapshot(
        self, engine: MarketEngine, db: MagicMock, account_repo: AsyncMock
    ) -> None:
        result = await AdminService(account_repo).advance_round(engine, db)

        assert result.message == "Round 1 of 4 complete"
        assert result.market.current_round == 1
        solr = next(s for s in result.market.stocks if s.id == "SOLR")
        assert solr.current_price_cents == 8500

    async def test_round_limit_propagates(
        self, engine: MarketEngine, db: MagicMock, account_repo: AsyncMock
    ) -> None:
        svc = AdminService(account_repo)
        for _ in range(4):
            await svc.advance_round(engine, db)
        with pytest.raises(RoundLimitReachedError):
            await svc.advance_round(engine, db)

    async def test_reset_wipes_holdings(
        self, engine: MarketEngine, db: MagicMock, account_repo: AsyncMock
    ) -> None:
        svc = AdminService(account_repo)
        await svc.advance_round(engine, db)

        result = await svc.reset_market(engine, db)

        account_repo.delete_all_holdings.assert_awaited_once_with(db)
        assert result.market.current_round == 0
        assert result.message == "Market reset to round 0"

    async def test_item_controls(
        self, engine: MarketEngine, db: MagicMock, account_repo: AsyncMock
    ) -> None:
        svc = AdminService(account_repo)

        frozen = await svc.set_item_frozen(engine, db, "CCRD", True)
        adjusted = await svc.adjust_price(engine, db, "SOLR", 250)

        ccrd = next(c for c in frozen.market.commodities if c.id == "CCRD")
        assert ccrd.is_frozen is True
        assert adjusted.message == "SOLR will move an extra +2.50% next round"

    async def test_event(
        self, engine: MarketEngine, db: MagicMock, account_repo: AsyncMock
    ) -> None:
        result = await AdminService(account_repo).trigger_event(engine, db, MarketEvent.BOOM)
        assert result.market.active_event == "BOOM"
        assert result.market.event_round == 0

    async def test_freeze(
        self, engine: MarketEngine, db: MagicMock, account_repo: AsyncMock
    ) -> None:
        svc = AdminService(account_repo)
        result = await svc.freeze_market(engine, db, 30)
        assert result.market.market_frozen is True
        assert result.market.market_freeze_until is not None

        with pytest.raises(InvalidDurationError):
            await svc.freeze_market(engine, db, -5)

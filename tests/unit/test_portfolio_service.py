"""Unit tests for PortfolioApplicationService (portfolio + leaderboard)."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cc_account.domain.models import Holding, TeamAccount
from src.cc_common.errors import TeamNotFoundError
from src.cc_market.engine.engine import MarketEngine
from src.cc_portfolio.application.service import PortfolioApplicationService
from src.cc_portfolio.infrastructure.leaderboard_repository import TeamStanding


def _holding(team_id: str, item_id: str, quantity: int, avg: int) -> Holding:
    return Holding(team_id=team_id, item_id=item_id, quantity=quantity, avg_buy_price=avg)


class TestGetPortfolio:
    async def test_values_holdings_at_current_prices(
        self, engine: MarketEngine, db: MagicMock
    ) -> None:
        await engine.advance_round(db)   # SOLR 10000 -> 8500
        repo = AsyncMock()
        repo.get_account.return_value = TeamAccount(team_id="t1", balance=40000)
        repo.list_holdings.return_value = [_holding("t1", "SOLR", 6, 10000)]
        svc = PortfolioApplicationService(repo=repo, leaderboard_repo=AsyncMock())

        result = await svc.get_portfolio(engine, db, "t1")

        assert result.team_id == "t1"
        view = result.holdings[0]
        assert view.current_price_cents == 8500
        assert view.pnl_cents == -9000
        assert view.pnl_percent == -15.0
        assert result.summary.net_worth_cents == 40000 + 51000
        assert result.summary.net_worth_display == "910.00 CC"

    async def test_unopened_account_shows_starting_balance(
        self, engine: MarketEngine, db: MagicMock
    ) -> None:
        repo = AsyncMock()
        repo.get_account.return_value = None
        svc = PortfolioApplicationService(
            repo=repo, leaderboard_repo=AsyncMock(), starting_balance=100000
        )

        result = await svc.get_portfolio(engine, db, "new-team")

        assert result.holdings == []
        assert result.summary.balance_cents == 100000
        repo.list_holdings.assert_not_awaited()

    async def test_admin_lookup_of_unknown_team(
        self, engine: MarketEngine, db: MagicMock
    ) -> None:
        repo = AsyncMock()
        repo.get_account.return_value = None
        svc = PortfolioApplicationService(repo=repo, leaderboard_repo=AsyncMock())

        with pytest.raises(TeamNotFoundError):
            await svc.get_portfolio(engine, db, "ghost", must_exist=True)


class TestLeaderboard:
    async def test_ranked_by_balance_then_team_id(
        self, engine: MarketEngine, db: MagicMock
    ) -> None:
        board_repo = AsyncMock()
        board_repo.list_teams.return_value = [
            TeamStanding(team_id="zeta", balance=90000, quiz_score=0),
            TeamStanding(team_id="alpha", balance=90000, quiz_score=1500),
            TeamStanding(team_id="rich", balance=150000, quiz_score=500),
        ]
        board_repo.holdings_by_team.return_value = {
            "zeta": [_holding("zeta", "SOLR", 2, 9000)],
        }
        svc = PortfolioApplicationService(repo=AsyncMock(), leaderboard_repo=board_repo)

        result = await svc.get_leaderboard(engine, db)

        assert [e.team_id for e in result.items] == ["rich", "alpha", "zeta"]
        assert [e.rank for e in result.items] == [1, 2, 3]
        zeta = result.items[2]
        assert zeta.holdings_value_cents == 20000
        assert zeta.net_worth_cents == 110000
        assert result.items[1].quiz_score_cents == 1500

    async def test_empty(self, engine: MarketEngine, db: MagicMock) -> None:
        board_repo = AsyncMock()
        board_repo.list_teams.return_value = []
        board_repo.holdings_by_team.return_value = {}
        svc = PortfolioApplicationService(repo=AsyncMock(), leaderboard_repo=board_repo)

        result = await svc.get_leaderboard(engine, db)

        assert result.items == []

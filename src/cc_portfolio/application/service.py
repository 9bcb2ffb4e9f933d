"""PortfolioApplicationService: read-only composition of holdings and prices.

No commit/rollback: nothing here writes (lazy freeze expiry is the engine's).
Safe to poll.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_account.domain.models import Holding
from src.cc_account.domain.repository import AccountRepositoryProtocol
from src.cc_account.infrastructure.persistence import AccountRepository
from src.cc_common.credits import cents_to_display
from src.cc_common.errors import TeamNotFoundError
from src.cc_market.engine.engine import MarketEngine
from src.cc_portfolio.application.schemas import (
    HoldingView,
    LeaderboardEntry,
    LeaderboardResponse,
    PortfolioResponse,
    PortfolioSummaryView,
)
from src.cc_portfolio.domain.valuation import summarize, value_holding, value_portfolio
from src.cc_portfolio.infrastructure.leaderboard_repository import LeaderboardRepository


class PortfolioApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        leaderboard_repo: LeaderboardRepository | None = None,
        starting_balance: int | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._leaderboard_repo = leaderboard_repo or LeaderboardRepository()
        self._starting_balance = (
            settings.STARTING_BALANCE_CENTS if starting_balance is None else starting_balance
        )

    async def get_portfolio(
        self,
        engine: MarketEngine,
        db: AsyncSession,
        team_id: str,
        must_exist: bool = False,
    ) -> PortfolioResponse:
        """Own-team reads of a not-yet-opened account show the starting
        balance; admin lookups (must_exist=True) of unknown teams raise."""
        account = await self._repo.get_account(db, team_id)
        if account is None:
            if must_exist:
                raise TeamNotFoundError(team_id)
            balance = self._starting_balance
            holdings: list[Holding] = []
        else:
            balance = account.balance
            holdings = await self._repo.list_holdings(db, team_id)

        valuations, summary = value_portfolio(balance, holdings, engine.state)
        return PortfolioResponse(
            team_id=team_id,
            holdings=[HoldingView.from_domain(v) for v in valuations],
            summary=PortfolioSummaryView.from_domain(summary),
        )

    async def get_leaderboard(
        self, engine: MarketEngine, db: AsyncSession
    ) -> LeaderboardResponse:
        state = engine.state
        teams = await self._leaderboard_repo.list_teams(db)
        holdings = await self._leaderboard_repo.holdings_by_team(db)

        ranked = sorted(teams, key=lambda t: (-t.balance, t.team_id))
        items = []
        for rank, team in enumerate(ranked, start=1):
            valuations = [value_holding(h, state) for h in holdings.get(team.team_id, [])]
            summary = summarize(team.balance, valuations)
            items.append(
                LeaderboardEntry(
                    rank=rank,
                    team_id=team.team_id,
                    balance_cents=team.balance,
                    balance_display=cents_to_display(team.balance),
                    quiz_score_cents=team.quiz_score,
                    holdings_value_cents=summary.current_value,
                    net_worth_cents=summary.net_worth,
                    net_worth_display=cents_to_display(summary.net_worth),
                )
            )
        return LeaderboardResponse(items=items)

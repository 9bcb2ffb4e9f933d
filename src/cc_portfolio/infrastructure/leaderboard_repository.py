# src/cc_portfolio/infrastructure/leaderboard_repository.py
"""Read-only cross-team queries for the leaderboard."""
from collections import defaultdict
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_account.domain.models import Holding

_LIST_TEAMS_SQL = text("""
    SELECT a.team_id,
           a.balance,
           COALESCE(SUM(t.amount) FILTER (WHERE t.tx_type = 'QUIZ'), 0) AS quiz_score
    FROM team_accounts a
    LEFT JOIN transactions t ON t.team_id = a.team_id
    GROUP BY a.team_id, a.balance
""")

_LIST_ALL_HOLDINGS_SQL = text("""
    SELECT team_id, item_id, quantity, avg_buy_price
    FROM holdings
    ORDER BY team_id, item_id
""")


@dataclass(frozen=True)
class TeamStanding:
    team_id: str
    balance: int
    quiz_score: int


class LeaderboardRepository:
    async def list_teams(self, db: AsyncSession) -> list[TeamStanding]:
        rows = (await db.execute(_LIST_TEAMS_SQL)).fetchall()
        return [
            TeamStanding(
                team_id=r.team_id,
                balance=r.balance,
                quiz_score=int(r.quiz_score),
            )
            for r in rows
        ]

    async def holdings_by_team(self, db: AsyncSession) -> dict[str, list[Holding]]:
        rows = (await db.execute(_LIST_ALL_HOLDINGS_SQL)).fetchall()
        grouped: dict[str, list[Holding]] = defaultdict(list)
        for r in rows:
            grouped[r.team_id].append(
                Holding(
                    team_id=r.team_id,
                    item_id=r.item_id,
                    quantity=r.quantity,
                    avg_buy_price=r.avg_buy_price,
                )
            )
        return grouped

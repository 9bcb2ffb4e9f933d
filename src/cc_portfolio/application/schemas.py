"""Pydantic schemas for cc_portfolio API responses."""

from pydantic import BaseModel

from src.cc_common.credits import bps_to_percent, cents_to_display
from src.cc_portfolio.domain.valuation import HoldingValuation, PortfolioSummary


class HoldingView(BaseModel):
    item_id: str
    symbol: str
    name: str
    item_type: str | None
    quantity: int
    avg_buy_price_cents: int
    current_price_cents: int
    invested_cents: int
    current_value_cents: int
    current_value_display: str
    pnl_cents: int
    pnl_display: str
    pnl_bps: int
    pnl_percent: float

    @classmethod
    def from_domain(cls, v: HoldingValuation) -> "HoldingView":
        return cls(
            item_id=v.item_id,
            symbol=v.symbol,
            name=v.name,
            item_type=v.item_type,
            quantity=v.quantity,
            avg_buy_price_cents=v.avg_buy_price,
            current_price_cents=v.current_price,
            invested_cents=v.invested,
            current_value_cents=v.current_value,
            current_value_display=cents_to_display(v.current_value),
            pnl_cents=v.pnl,
            pnl_display=cents_to_display(v.pnl),
            pnl_bps=v.pnl_bps,
            pnl_percent=bps_to_percent(v.pnl_bps),
        )


class PortfolioSummaryView(BaseModel):
    balance_cents: int
    balance_display: str
    total_invested_cents: int
    current_value_cents: int
    total_pnl_cents: int
    total_pnl_display: str
    total_pnl_percent: float
    net_worth_cents: int
    net_worth_display: str

    @classmethod
    def from_domain(cls, s: PortfolioSummary) -> "PortfolioSummaryView":
        return cls(
            balance_cents=s.balance,
            balance_display=cents_to_display(s.balance),
            total_invested_cents=s.total_invested,
            current_value_cents=s.current_value,
            total_pnl_cents=s.total_pnl,
            total_pnl_display=cents_to_display(s.total_pnl),
            total_pnl_percent=bps_to_percent(s.total_pnl_bps),
            net_worth_cents=s.net_worth,
            net_worth_display=cents_to_display(s.net_worth),
        )


class PortfolioResponse(BaseModel):
    team_id: str
    holdings: list[HoldingView]
    summary: PortfolioSummaryView


class LeaderboardEntry(BaseModel):
    rank: int
    team_id: str
    balance_cents: int
    balance_display: str
    quiz_score_cents: int
    holdings_value_cents: int
    net_worth_cents: int
    net_worth_display: str


class LeaderboardResponse(BaseModel):
    items: list[LeaderboardEntry]

"""Unit tests for portfolio valuation."""

from src.cc_account.domain.models import Holding
from src.cc_market.domain.models import MarketState
from src.cc_portfolio.domain.valuation import summarize, value_holding, value_portfolio


def _holding(item_id: str, quantity: int, avg: int) -> Holding:
    return Holding(team_id="t1", item_id=item_id, quantity=quantity, avg_buy_price=avg)


class TestValueHolding:
    def test_gain(self, state: MarketState) -> None:
        v = value_holding(_holding("SOLR", 10, 9000), state)

        assert v.symbol == "SOLR"
        assert v.item_type == "STOCK"
        assert v.current_price == 10000
        assert v.invested == 90000
        assert v.current_value == 100000
        assert v.pnl == 10000
        assert v.pnl_bps == 1111

    def test_loss(self, state: MarketState) -> None:
        v = value_holding(_holding("CCRD", 4, 6000), state)
        assert v.pnl == -4000
        assert v.pnl_bps == -1667

    def test_item_missing_from_market_carried_at_cost(self, state: MarketState) -> None:
        v = value_holding(_holding("GONE", 2, 700), state)
        assert v.current_price == 700
        assert v.pnl == 0
        assert v.item_type is None


class TestSummary:
    def test_totals(self, state: MarketState) -> None:
        valuations, summary = value_portfolio(
            50000,
            [_holding("SOLR", 10, 9000), _holding("CCRD", 4, 6000)],
            state,
        )

        assert len(valuations) == 2
        assert summary.total_invested == 114000
        assert summary.current_value == 120000
        assert summary.total_pnl == 6000
        assert summary.total_pnl_bps == 526
        assert summary.net_worth == 170000

    def test_empty_portfolio(self) -> None:
        summary = summarize(100000, [])
        assert summary.total_pnl == 0
        assert summary.total_pnl_bps == 0
        assert summary.net_worth == 100000

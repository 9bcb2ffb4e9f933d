from datetime import UTC, datetime, timedelta

import pytest

from config.settings import settings
from src.cc_account.domain.models import Holding
from src.cc_common.errors import (
    AppError,
    InsufficientBalanceError,
    InsufficientHoldingsError,
    ItemFrozenError,
    MarketFrozenError,
)
from src.cc_market.domain.models import MarketState
from src.cc_risk.rules.balance_check import check_balance
from src.cc_risk.rules.holdings_check import check_holdings
from src.cc_risk.rules.order_quantity import check_quantity
from src.cc_risk.rules.trading_halt import check_item_tradable, check_market_open

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


class TestOrderQuantity:
    def test_valid_quantity(self) -> None:
        check_quantity(1)

    def test_max_quantity(self) -> None:
        check_quantity(settings.MAX_TRADE_QUANTITY)

    def test_exceeds_limit_raises(self) -> None:
        with pytest.raises(AppError) as exc_info:
            check_quantity(settings.MAX_TRADE_QUANTITY + 1)
        assert exc_info.value.code == 1001

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_raises(self, quantity: int) -> None:
        with pytest.raises(AppError) as exc_info:
            check_quantity(quantity)
        assert exc_info.value.code == 1001

    def test_custom_limit(self) -> None:
        with pytest.raises(AppError):
            check_quantity(11, max_quantity=10)

    def test_default_follows_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "MAX_TRADE_QUANTITY", 50)
        check_quantity(50)
        with pytest.raises(AppError):
            check_quantity(51)


class TestBalance:
    def test_exact(self) -> None:
        check_balance(500, 500)

    def test_short_by_one_cent(self) -> None:
        with pytest.raises(InsufficientBalanceError):
            check_balance(501, 500)


class TestHoldings:
    def test_covers(self) -> None:
        h = Holding(team_id="t1", item_id="SOLR", quantity=5, avg_buy_price=100)
        assert check_holdings(h, "SOLR", 5) is h

    def test_too_few(self) -> None:
        h = Holding(team_id="t1", item_id="SOLR", quantity=5, avg_buy_price=100)
        with pytest.raises(InsufficientHoldingsError, match="held 5"):
            check_holdings(h, "SOLR", 6)

    def test_none_held(self) -> None:
        with pytest.raises(InsufficientHoldingsError, match="held 0"):
            check_holdings(None, "SOLR", 1)


class TestTradingHalt:
    def test_open_market(self, state: MarketState) -> None:
        check_market_open(state, NOW)

    def test_frozen_market(self, state: MarketState) -> None:
        state.market_frozen = True
        state.market_freeze_until = NOW + timedelta(minutes=5)
        with pytest.raises(MarketFrozenError):
            check_market_open(state, NOW)

    def test_elapsed_freeze_counts_as_open(self, state: MarketState) -> None:
        state.market_frozen = True
        state.market_freeze_until = NOW - timedelta(seconds=1)
        check_market_open(state, NOW)

    def test_frozen_item(self, state: MarketState) -> None:
        state.items["SOLR"].is_frozen = True
        with pytest.raises(ItemFrozenError):
            check_item_tradable(state.items["SOLR"])
        check_item_tradable(state.items["CCRD"])

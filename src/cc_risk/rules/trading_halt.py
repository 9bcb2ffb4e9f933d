"""Freeze checks. The market-wide freeze is checked first, so a frozen
market reports MarketFrozen regardless of the item's own flag."""

from datetime import datetime

from src.cc_common.errors import ItemFrozenError, MarketFrozenError
from src.cc_market.domain.models import ItemRuntimeState, MarketState


def check_market_open(state: MarketState, now: datetime) -> None:
    if state.is_trading_halted(now):
        raise MarketFrozenError()


def check_item_tradable(item_state: ItemRuntimeState) -> None:
    if item_state.is_frozen:
        raise ItemFrozenError(item_state.item.id)

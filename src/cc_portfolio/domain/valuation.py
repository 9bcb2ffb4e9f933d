"""Portfolio valuation: pure functions, no I/O, no state of their own.

Per holding:
    invested      = quantity × avg_buy_price
    current_value = quantity × current_price
    pnl           = current_value - invested
    pnl_bps       = pnl / invested × 10000
Aggregate:
    total_invested, current_value, total_pnl = current_value - total_invested
    net_worth     = balance + current_value
"""

from dataclasses import dataclass

from src.cc_account.domain.models import Holding
from src.cc_common.credits import ratio_bps
from src.cc_market.domain.models import MarketState


@dataclass(frozen=True)
class HoldingValuation:
    item_id: str
    symbol: str
    name: str
    item_type: str | None
    quantity: int
    avg_buy_price: int
    current_price: int
    invested: int
    current_value: int
    pnl: int
    pnl_bps: int


@dataclass(frozen=True)
class PortfolioSummary:
    balance: int
    total_invested: int
    current_value: int
    total_pnl: int
    total_pnl_bps: int
    net_worth: int


def value_holding(holding: Holding, state: MarketState) -> HoldingValuation:
    item_state = state.items.get(holding.item_id)
    if item_state is None:
        # Item dropped from the catalog: carry it at cost
        symbol, name, item_type = holding.item_id, holding.item_id, None
        price = holding.avg_buy_price
    else:
        item = item_state.item
        symbol, name, item_type = item.symbol, item.name, item.item_type.value
        price = item_state.current_price

    invested = holding.cost_basis
    current_value = holding.quantity * price
    pnl = current_value - invested
    return HoldingValuation(
        item_id=holding.item_id,
        symbol=symbol,
        name=name,
        item_type=item_type,
        quantity=holding.quantity,
        avg_buy_price=holding.avg_buy_price,
        current_price=price,
        invested=invested,
        current_value=current_value,
        pnl=pnl,
        pnl_bps=ratio_bps(pnl, invested),
    )


def summarize(balance: int, valuations: list[HoldingValuation]) -> PortfolioSummary:
    total_invested = sum(v.invested for v in valuations)
    current_value = sum(v.current_value for v in valuations)
    total_pnl = current_value - total_invested
    return PortfolioSummary(
        balance=balance,
        total_invested=total_invested,
        current_value=current_value,
        total_pnl=total_pnl,
        total_pnl_bps=ratio_bps(total_pnl, total_invested),
        net_worth=balance + current_value,
    )


def value_portfolio(
    balance: int, holdings: list[Holding], state: MarketState
) -> tuple[list[HoldingValuation], PortfolioSummary]:
    valuations = [value_holding(h, state) for h in holdings]
    return valuations, summarize(balance, valuations)

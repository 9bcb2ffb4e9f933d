"""Fill arithmetic: pure functions over (balance, holding, price, quantity).

Buy:  balance -= qty × price
      avg'  = round2((avg × held + price × qty) / (held + qty))
Sell: balance += qty × price
      held' = held - qty; avg unchanged; holding removed at 0
"""

from dataclasses import dataclass

from src.cc_account.domain.models import Holding
from src.cc_common.credits import div_round_half_up
from src.cc_common.enums import TransactionType
from src.cc_risk.rules.balance_check import check_balance
from src.cc_risk.rules.holdings_check import check_holdings


@dataclass(frozen=True)
class Fill:
    side: TransactionType
    team_id: str
    item_id: str
    quantity: int
    price: int                   # cents per unit
    amount: int                  # cents, signed change to balance
    balance_after: int
    holding_after: Holding | None   # None → holding deleted


def weighted_average(old_avg: int, old_qty: int, price: int, quantity: int) -> int:
    return div_round_half_up(old_avg * old_qty + price * quantity, old_qty + quantity)


def fill_buy(
    team_id: str,
    item_id: str,
    balance: int,
    holding: Holding | None,
    price: int,
    quantity: int,
) -> Fill:
    cost = price * quantity
    check_balance(cost, balance)

    if holding is None:
        after = Holding(team_id=team_id, item_id=item_id, quantity=quantity, avg_buy_price=price)
    else:
        after = Holding(
            team_id=team_id,
            item_id=item_id,
            quantity=holding.quantity + quantity,
            avg_buy_price=weighted_average(
                holding.avg_buy_price, holding.quantity, price, quantity
            ),
        )
    return Fill(
        side=TransactionType.BUY,
        team_id=team_id,
        item_id=item_id,
        quantity=quantity,
        price=price,
        amount=-cost,
        balance_after=balance - cost,
        holding_after=after,
    )


def fill_sell(
    team_id: str,
    item_id: str,
    balance: int,
    holding: Holding | None,
    price: int,
    quantity: int,
) -> Fill:
    held = check_holdings(holding, item_id, quantity)
    revenue = price * quantity
    remaining = held.quantity - quantity
    after = (
        Holding(
            team_id=team_id,
            item_id=item_id,
            quantity=remaining,
            avg_buy_price=held.avg_buy_price,
        )
        if remaining > 0
        else None
    )
    return Fill(
        side=TransactionType.SELL,
        team_id=team_id,
        item_id=item_id,
        quantity=quantity,
        price=price,
        amount=revenue,
        balance_after=balance + revenue,
        holding_after=after,
    )

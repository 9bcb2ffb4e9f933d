"""Pydantic schemas for cc_trading API.

Quantity is deliberately unconstrained here: range checks belong to the
trade processor so every caller gets the same InvalidQuantity error.
The request carries no price; fills always use the engine's current price.
"""

from pydantic import BaseModel, Field

from src.cc_common.credits import cents_to_display
from src.cc_trading.domain.fills import Fill


class TradeRequest(BaseModel):
    item_id: str = Field(..., min_length=1, max_length=32)
    quantity: int


class TradeResponse(BaseModel):
    message: str
    new_balance_cents: int
    new_balance_display: str
    side: str
    item_id: str
    quantity: int
    price_cents: int
    amount_cents: int
    transaction_id: int

    @classmethod
    def from_fill(cls, fill: Fill, symbol: str, transaction_id: int) -> "TradeResponse":
        verb = "Bought" if fill.amount < 0 else "Sold"
        return cls(
            message=(
                f"{verb} {fill.quantity}x {symbol} for {cents_to_display(abs(fill.amount))}"
            ),
            new_balance_cents=fill.balance_after,
            new_balance_display=cents_to_display(fill.balance_after),
            side=fill.side.value,
            item_id=fill.item_id,
            quantity=fill.quantity,
            price_cents=fill.price,
            amount_cents=fill.amount,
            transaction_id=transaction_id,
        )

"""Domain models for cc_account: pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TeamAccount:
    team_id: str
    balance: int             # cents, never negative
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Holding:
    team_id: str
    item_id: str
    quantity: int            # > 0; a holding at 0 is deleted
    avg_buy_price: int       # cents, quantity-weighted over unsold buys

    @property
    def cost_basis(self) -> int:
        return self.quantity * self.avg_buy_price


@dataclass
class Transaction:
    id: int                          # BIGSERIAL
    team_id: str
    tx_type: str                     # TransactionType value
    label: str                       # item symbol, quiz/game name
    quantity: int
    amount: int                      # cents, positive=credit negative=debit
    balance_after: int               # cents, balance snapshot after op
    item_id: str | None = None
    reference_id: str | None = None  # idempotency key for rewards/penalties
    created_at: datetime | None = None

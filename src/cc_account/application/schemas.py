"""Pydantic schemas and cursor utilities for cc_account API."""

import base64
import json

from pydantic import BaseModel, Field

from src.cc_account.domain.models import Transaction
from src.cc_common.credits import cents_to_display
from src.cc_common.enums import RewardKind

# ---------------------------------------------------------------------------
# Cursor-based pagination utilities
# ---------------------------------------------------------------------------


def cursor_encode(last_id: int) -> str:
    """Encode a BIGINT primary key into an opaque Base64 cursor string."""
    payload = json.dumps({"id": last_id})
    return base64.b64encode(payload.encode()).decode()


def cursor_decode(cursor: str | None) -> int | None:
    """Decode a cursor string back to the last seen id. Returns None on error."""
    if cursor is None:
        return None
    try:
        payload = json.loads(base64.b64decode(cursor.encode()).decode())
        return int(payload["id"])
    except (ValueError, KeyError, TypeError):
        return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RewardRequest(BaseModel):
    team_id: str = Field(..., min_length=1, max_length=64)
    kind: RewardKind
    label: str = Field(..., min_length=1, max_length=100, description="Quiz or game name")
    amount_cents: int = Field(..., gt=0)
    reference_id: str = Field(
        ..., min_length=1, max_length=64, description="Question/game id; credited once"
    )


class PenaltyRequest(BaseModel):
    team_id: str = Field(..., min_length=1, max_length=64)
    label: str = Field(..., min_length=1, max_length=100)
    amount_cents: int = Field(..., gt=0)
    reference_id: str = Field(..., min_length=1, max_length=64)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BalanceResponse(BaseModel):
    team_id: str
    balance_cents: int
    balance_display: str

    @classmethod
    def from_cents(cls, team_id: str, balance: int) -> "BalanceResponse":
        return cls(
            team_id=team_id,
            balance_cents=balance,
            balance_display=cents_to_display(balance),
        )


class BalanceChangeResponse(BaseModel):
    """Result of a reward or penalty. applied=False means the reference id
    was already settled and nothing changed."""

    applied: bool
    amount_cents: int
    balance_cents: int
    balance_display: str
    transaction_id: int


class TransactionItem(BaseModel):
    id: int
    tx_type: str
    label: str
    item_id: str | None
    quantity: int
    amount_cents: int
    amount_display: str
    balance_after_cents: int
    reference_id: str | None
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, t: Transaction) -> "TransactionItem":
        return cls(
            id=t.id,
            tx_type=t.tx_type,
            label=t.label,
            item_id=t.item_id,
            quantity=t.quantity,
            amount_cents=t.amount,
            amount_display=cents_to_display(t.amount),
            balance_after_cents=t.balance_after,
            reference_id=t.reference_id,
            created_at=t.created_at.isoformat() if t.created_at else "",
        )


class TransactionListResponse(BaseModel):
    items: list[TransactionItem]
    next_cursor: str | None
    has_more: bool

"""Global enums: must match DB CHECK constraints exactly."""

from enum import Enum


class ItemType(str, Enum):
    STOCK = "STOCK"
    COMMODITY = "COMMODITY"


class MarketEvent(str, Enum):
    """Market-wide shock applied on top of every item's round change."""
    CRASH = "CRASH"
    RECOVERY = "RECOVERY"
    BOOM = "BOOM"


# Overlay in basis points added to every item's effective change
EVENT_OVERLAY_BPS: dict[MarketEvent, int] = {
    MarketEvent.CRASH: -1500,
    MarketEvent.RECOVERY: 1000,
    MarketEvent.BOOM: 2000,
}


class TransactionType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    # Credits/debits pushed by the quiz and mini-game collaborators
    QUIZ = "QUIZ"
    GAME_WIN = "GAME_WIN"
    PENALTY = "PENALTY"


class RewardKind(str, Enum):
    QUIZ = "QUIZ"
    GAME_WIN = "GAME_WIN"

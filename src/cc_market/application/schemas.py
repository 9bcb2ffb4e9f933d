"""Pydantic schemas for cc_market API responses.

Percent fields are exposed twice: exact integer bps, and a float percent
for display (`-1500` → `-15.0`).
"""

from datetime import datetime

from pydantic import BaseModel

from src.cc_common.credits import bps_to_percent, cents_to_display
from src.cc_common.datetime_utils import iso_or_none
from src.cc_common.enums import ItemType
from src.cc_market.domain.models import ItemRuntimeState, MarketState, NewsEntry


class NewsEntryOut(BaseModel):
    round: int
    news: str
    change_bps: int
    change_percent: float
    price_after_cents: int

    @classmethod
    def from_domain(cls, e: NewsEntry) -> "NewsEntryOut":
        return cls(
            round=e.round,
            news=e.news,
            change_bps=e.change_bps,
            change_percent=bps_to_percent(e.change_bps),
            price_after_cents=e.price_after,
        )


class ItemView(BaseModel):
    id: str
    symbol: str
    name: str
    item_type: str
    sector: str | None
    base_price_cents: int
    current_price_cents: int
    current_price_display: str
    change_bps: int
    change_percent: float
    total_change_bps: int
    total_change_percent: float
    is_frozen: bool
    current_news: str | None
    news_history: list[NewsEntryOut]
    price_history_cents: list[int]

    @classmethod
    def from_domain(cls, s: ItemRuntimeState) -> "ItemView":
        total = s.total_change_bps
        return cls(
            id=s.item.id,
            symbol=s.item.symbol,
            name=s.item.name,
            item_type=s.item.item_type.value,
            sector=s.item.sector,
            base_price_cents=s.item.base_price_cents,
            current_price_cents=s.current_price,
            current_price_display=cents_to_display(s.current_price),
            change_bps=s.change_bps,
            change_percent=bps_to_percent(s.change_bps),
            total_change_bps=total,
            total_change_percent=bps_to_percent(total),
            is_frozen=s.is_frozen,
            current_news=s.current_news,
            news_history=[NewsEntryOut.from_domain(e) for e in s.news_history],
            price_history_cents=list(s.price_history),
        )


class MarketDataResponse(BaseModel):
    current_round: int
    total_rounds: int
    active_event: str | None
    event_round: int | None
    market_frozen: bool
    market_freeze_until: str | None
    stocks: list[ItemView]
    commodities: list[ItemView]

    @classmethod
    def from_state(cls, state: MarketState, now: datetime) -> "MarketDataResponse":
        frozen = state.is_trading_halted(now)
        views = [ItemView.from_domain(s) for s in state.items.values()]
        return cls(
            current_round=state.current_round,
            total_rounds=state.total_rounds,
            active_event=state.active_event.value if state.active_event else None,
            event_round=state.event_round,
            market_frozen=frozen,
            market_freeze_until=iso_or_none(state.market_freeze_until) if frozen else None,
            stocks=[v for v in views if v.item_type == ItemType.STOCK.value],
            commodities=[v for v in views if v.item_type == ItemType.COMMODITY.value],
        )


class MarketActionResponse(BaseModel):
    """Every admin operation returns a status message plus a fresh snapshot."""

    message: str
    market: MarketDataResponse

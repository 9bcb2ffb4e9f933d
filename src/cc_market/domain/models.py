"""Domain models for cc_market: mutable price round state.

A MarketState is owned by exactly one MarketEngine. Mutations are always
applied to a deep copy and swapped in whole, so these classes carry no locks.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.cc_catalog.domain.models import Catalog, Item
from src.cc_common.credits import change_bps
from src.cc_common.enums import MarketEvent


@dataclass
class NewsEntry:
    round: int
    news: str
    change_bps: int        # effective change applied (canonical + event + admin extra)
    price_after: int       # cents


@dataclass
class ItemRuntimeState:
    item: Item
    price_history: list[int]              # cents, index 0 = base price
    change_bps: int = 0                   # last round's effective change
    is_frozen: bool = False
    admin_extra_bps: int = 0              # staged for the next round only
    news_history: list[NewsEntry] = field(default_factory=list)

    @classmethod
    def initial(cls, item: Item) -> "ItemRuntimeState":
        return cls(item=item, price_history=[item.base_price_cents])

    @property
    def current_price(self) -> int:
        return self.price_history[-1]

    @property
    def total_change_bps(self) -> int:
        # Always derived from base/current so it cannot drift
        return change_bps(self.item.base_price_cents, self.current_price)

    @property
    def current_news(self) -> str | None:
        return self.news_history[-1].news if self.news_history else None


@dataclass
class MarketState:
    total_rounds: int
    items: dict[str, ItemRuntimeState]
    current_round: int = 0
    active_event: MarketEvent | None = None
    event_round: int | None = None
    market_frozen: bool = False
    market_freeze_until: datetime | None = None

    @classmethod
    def initial(cls, catalog: Catalog) -> "MarketState":
        return cls(
            total_rounds=catalog.total_rounds,
            items={item.id: ItemRuntimeState.initial(item) for item in catalog.items},
        )

    def is_trading_halted(self, now: datetime) -> bool:
        """Market-wide freeze in effect at `now` (expired windows count as open)."""
        if not self.market_frozen:
            return False
        return self.market_freeze_until is None or now < self.market_freeze_until

    def freeze_expired(self, now: datetime) -> bool:
        return (
            self.market_frozen
            and self.market_freeze_until is not None
            and now >= self.market_freeze_until
        )

"""Domain models for cc_catalog: immutable item definitions."""

from dataclasses import dataclass

from src.cc_common.enums import ItemType


@dataclass(frozen=True)
class RoundChange:
    change_bps: int     # canonical percent change for the round, in bps
    news: str


@dataclass(frozen=True)
class Item:
    id: str
    symbol: str
    name: str
    item_type: ItemType
    sector: str | None
    base_price_cents: int
    round_changes: tuple[RoundChange, ...]   # index 0 = round 1

    def change_for_round(self, round_no: int) -> RoundChange:
        """1-indexed lookup into the per-round news table."""
        return self.round_changes[round_no - 1]


@dataclass(frozen=True)
class Catalog:
    items: tuple[Item, ...]

    @property
    def total_rounds(self) -> int:
        return len(self.items[0].round_changes) if self.items else 0

    def get(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

"""Item catalog loader: JSON file → validated immutable Catalog.

File format:
{
  "items": [
    {"id": "SOLR", "symbol": "SOLR", "name": "...", "item_type": "STOCK",
     "sector": "Energy", "base_price_cents": 12000,
     "round_changes": [{"change_bps": -1500, "news": "..."}, ...]},
    ...
  ]
}

Every item must carry the same number of rounds; that number becomes the
market's total_rounds.
"""

import json
import logging
from pathlib import Path

import pydantic
from pydantic import BaseModel, Field

from src.cc_catalog.domain.models import Catalog, Item, RoundChange
from src.cc_common.enums import ItemType
from src.cc_common.errors import CatalogError

logger = logging.getLogger(__name__)


class RoundChangeIn(BaseModel):
    change_bps: int
    news: str


class ItemIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=32)
    symbol: str = Field(..., min_length=1, max_length=16)
    name: str
    item_type: ItemType
    sector: str | None = None
    base_price_cents: int = Field(..., gt=0)
    round_changes: list[RoundChangeIn] = Field(..., min_length=1)

    def to_domain(self) -> Item:
        return Item(
            id=self.id,
            symbol=self.symbol,
            name=self.name,
            item_type=self.item_type,
            sector=self.sector,
            base_price_cents=self.base_price_cents,
            round_changes=tuple(
                RoundChange(change_bps=rc.change_bps, news=rc.news)
                for rc in self.round_changes
            ),
        )


class CatalogIn(BaseModel):
    items: list[ItemIn] = Field(..., min_length=1)


def build_catalog(raw: dict) -> Catalog:
    """Validate a decoded catalog document and build the domain Catalog."""
    try:
        parsed = CatalogIn.model_validate(raw)
    except pydantic.ValidationError as e:
        raise CatalogError(str(e)) from e

    ids = [i.id for i in parsed.items]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise CatalogError(f"duplicate item ids {duplicates}")

    round_counts = {len(i.round_changes) for i in parsed.items}
    if len(round_counts) != 1:
        raise CatalogError(
            f"items disagree on number of rounds: {sorted(round_counts)}"
        )

    return Catalog(items=tuple(i.to_domain() for i in parsed.items))


def load_catalog(path: str | Path) -> Catalog:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"cannot read {path}: {e}") from e
    catalog = build_catalog(raw)
    logger.info(
        "Loaded catalog from %s: %d items, %d rounds",
        path,
        len(catalog.items),
        catalog.total_rounds,
    )
    return catalog

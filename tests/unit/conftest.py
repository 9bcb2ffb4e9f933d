"""Unit-test fixtures: a small two-item, four-round catalog."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.cc_catalog.domain.models import Catalog, Item, RoundChange
from src.cc_common.enums import ItemType
from src.cc_market.domain.models import MarketState
from src.cc_market.engine.engine import MarketEngine

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _make_item(
    item_id: str = "SOLR",
    base_price: int = 10000,
    changes: tuple[int, ...] = (-1500, 1000, 0, 500),
    item_type: ItemType = ItemType.STOCK,
) -> Item:
    return Item(
        id=item_id,
        symbol=item_id,
        name=f"{item_id} Corp",
        item_type=item_type,
        sector="Energy",
        base_price_cents=base_price,
        round_changes=tuple(
            RoundChange(change_bps=c, news=f"{item_id} round {i + 1}")
            for i, c in enumerate(changes)
        ),
    )


@pytest.fixture
def catalog() -> Catalog:
    return Catalog(
        items=(
            _make_item("SOLR", 10000, (-1500, 1000, 0, 500)),
            _make_item("CCRD", 5000, (1000, -2000, 500, 0), ItemType.COMMODITY),
        )
    )


@pytest.fixture
def state(catalog: Catalog) -> MarketState:
    return MarketState.initial(catalog)


class FakeClock:
    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def market_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.load_state.return_value = None
    return repo


@pytest.fixture
def db() -> MagicMock:
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def engine(catalog: Catalog, market_repo: AsyncMock, clock: FakeClock) -> MarketEngine:
    return MarketEngine(catalog, repo=market_repo, min_price_cents=500, clock=clock)

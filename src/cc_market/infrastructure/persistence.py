"""MarketRepository: concrete implementation of MarketRepositoryProtocol.

The market is a single row in `market_state` plus one row per item in
`item_states`. Price and news histories are stored as JSON text.

Transaction ownership: the CALLER (MarketEngine) commits or rolls back.
"""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_catalog.domain.models import Catalog
from src.cc_common.enums import MarketEvent
from src.cc_market.domain.models import ItemRuntimeState, MarketState, NewsEntry

_MARKET_ROW_ID = 1

_GET_MARKET_SQL = text("""
    SELECT current_round, total_rounds, active_event, event_round,
           market_frozen, market_freeze_until
    FROM market_state
    WHERE id = :id
""")

_LIST_ITEMS_SQL = text("""
    SELECT item_id, change_bps, is_frozen, admin_extra_bps,
           price_history, news_history
    FROM item_states
""")

_UPSERT_MARKET_SQL = text("""
    INSERT INTO market_state
        (id, current_round, total_rounds, active_event, event_round,
         market_frozen, market_freeze_until)
    VALUES
        (:id, :current_round, :total_rounds, :active_event, :event_round,
         :market_frozen, :market_freeze_until)
    ON CONFLICT (id) DO UPDATE SET
        current_round       = EXCLUDED.current_round,
        total_rounds        = EXCLUDED.total_rounds,
        active_event        = EXCLUDED.active_event,
        event_round         = EXCLUDED.event_round,
        market_frozen       = EXCLUDED.market_frozen,
        market_freeze_until = EXCLUDED.market_freeze_until,
        updated_at          = NOW()
""")

_UPSERT_ITEM_SQL = text("""
    INSERT INTO item_states
        (item_id, current_price, change_bps, is_frozen, admin_extra_bps,
         price_history, news_history)
    VALUES
        (:item_id, :current_price, :change_bps, :is_frozen, :admin_extra_bps,
         :price_history, :news_history)
    ON CONFLICT (item_id) DO UPDATE SET
        current_price   = EXCLUDED.current_price,
        change_bps      = EXCLUDED.change_bps,
        is_frozen       = EXCLUDED.is_frozen,
        admin_extra_bps = EXCLUDED.admin_extra_bps,
        price_history   = EXCLUDED.price_history,
        news_history    = EXCLUDED.news_history,
        updated_at      = NOW()
""")

_DELETE_STALE_ITEMS_SQL = text("""
    DELETE FROM item_states WHERE NOT (item_id = ANY(:item_ids))
""")


def _news_to_json(entries: list[NewsEntry]) -> str:
    return json.dumps(
        [
            {
                "round": e.round,
                "news": e.news,
                "change_bps": e.change_bps,
                "price_after": e.price_after,
            }
            for e in entries
        ]
    )


def _news_from_json(raw: str) -> list[NewsEntry]:
    return [
        NewsEntry(
            round=e["round"],
            news=e["news"],
            change_bps=e["change_bps"],
            price_after=e["price_after"],
        )
        for e in json.loads(raw)
    ]


def _row_to_item_state(row: Any, catalog: Catalog) -> ItemRuntimeState | None:
    item = catalog.get(row.item_id)
    if item is None:
        return None
    history = json.loads(row.price_history)
    if not history:
        return ItemRuntimeState.initial(item)
    return ItemRuntimeState(
        item=item,
        price_history=[int(p) for p in history],
        change_bps=row.change_bps,
        is_frozen=row.is_frozen,
        admin_extra_bps=row.admin_extra_bps,
        news_history=_news_from_json(row.news_history),
    )


class MarketRepository:
    """Concrete repository: whole-state snapshot read/write."""

    async def load_state(
        self, db: AsyncSession, catalog: Catalog
    ) -> MarketState | None:
        row = (await db.execute(_GET_MARKET_SQL, {"id": _MARKET_ROW_ID})).fetchone()
        if row is None:
            return None

        state = MarketState.initial(catalog)
        state.current_round = row.current_round
        state.active_event = MarketEvent(row.active_event) if row.active_event else None
        state.event_round = row.event_round
        state.market_frozen = row.market_frozen
        state.market_freeze_until = row.market_freeze_until

        # Items added to the catalog since the last save keep their initial state
        for item_row in (await db.execute(_LIST_ITEMS_SQL)).fetchall():
            item_state = _row_to_item_state(item_row, catalog)
            if item_state is not None:
                state.items[item_state.item.id] = item_state
        return state

    async def save_state(self, db: AsyncSession, state: MarketState) -> None:
        await db.execute(
            _UPSERT_MARKET_SQL,
            {
                "id": _MARKET_ROW_ID,
                "current_round": state.current_round,
                "total_rounds": state.total_rounds,
                "active_event": state.active_event.value if state.active_event else None,
                "event_round": state.event_round,
                "market_frozen": state.market_frozen,
                "market_freeze_until": state.market_freeze_until,
            },
        )
        for item_state in state.items.values():
            await db.execute(
                _UPSERT_ITEM_SQL,
                {
                    "item_id": item_state.item.id,
                    "current_price": item_state.current_price,
                    "change_bps": item_state.change_bps,
                    "is_frozen": item_state.is_frozen,
                    "admin_extra_bps": item_state.admin_extra_bps,
                    "price_history": json.dumps(item_state.price_history),
                    "news_history": _news_to_json(item_state.news_history),
                },
            )
        await db.execute(_DELETE_STALE_ITEMS_SQL, {"item_ids": list(state.items)})

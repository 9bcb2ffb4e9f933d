"""MarketEngine: stateful owner of the authoritative MarketState.

Concurrency model (single process, asyncio):
  - All mutations run under one asyncio.Lock.
  - A mutation is applied to a deep copy, persisted, committed, and only
    then swapped in as the live state. Readers holding the previous state
    keep a consistent snapshot; a failed write leaves the live state as it was.
  - Reads never take the lock.
  - Every reset bumps a generation counter. Trades read it before they
    start and re-check it before commit, so a fill priced against the
    pre-reset market is rolled back instead of surviving the wipe.
"""

import asyncio
import copy
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_catalog.domain.models import Catalog
from src.cc_common.datetime_utils import utc_now
from src.cc_common.enums import MarketEvent
from src.cc_common.errors import MarketResetError
from src.cc_market.domain import controls
from src.cc_market.domain.models import MarketState
from src.cc_market.domain.repository import MarketRepositoryProtocol
from src.cc_market.domain.rounds import advance_round
from src.cc_market.infrastructure.persistence import MarketRepository

logger = logging.getLogger(__name__)

AfterSave = Callable[[AsyncSession], Awaitable[object]]


class MarketEngine:
    def __init__(
        self,
        catalog: Catalog,
        repo: MarketRepositoryProtocol | None = None,
        min_price_cents: int = 500,
        max_freeze_minutes: int = 24 * 60,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._catalog = catalog
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()
        self._min_price_cents = min_price_cents
        self._max_freeze_minutes = max_freeze_minutes
        self._clock = clock
        self._state = MarketState.initial(catalog)
        self._lock = asyncio.Lock()
        self._generation = 0
        self._resetting = False

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def state(self) -> MarketState:
        """Current snapshot. Treat as read-only; it is replaced, never edited."""
        return self._state

    def now(self) -> datetime:
        return self._clock()

    def trading_generation(self) -> int:
        """Reset generation a trade is priced against. Rejects trades while a
        reset is being written."""
        if self._resetting:
            raise MarketResetError()
        return self._generation

    def check_generation(self, generation: int) -> None:
        if self._resetting or generation != self._generation:
            raise MarketResetError()

    async def load(self, db: AsyncSession) -> None:
        """Restore persisted state, or persist a fresh market on first start."""
        loaded = await self._repo.load_state(db, self._catalog)
        if loaded is not None:
            self._state = loaded
            logger.info(
                "Market restored at round %d/%d",
                loaded.current_round,
                loaded.total_rounds,
            )
            return
        await self._mutate(db, lambda draft: "Market initialised")

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------

    async def advance_round(self, db: AsyncSession) -> str:
        def apply(draft: MarketState) -> str:
            advance_round(draft, self._min_price_cents)
            return f"Round {draft.current_round} of {draft.total_rounds} complete"

        return await self._mutate(db, apply)

    async def set_item_frozen(self, db: AsyncSession, item_id: str, frozen: bool) -> str:
        return await self._mutate(
            db, lambda draft: controls.set_item_frozen(draft, item_id, frozen)
        )

    async def adjust_price(self, db: AsyncSession, item_id: str, extra_bps: int) -> str:
        return await self._mutate(
            db, lambda draft: controls.stage_adjustment(draft, item_id, extra_bps)
        )

    async def trigger_event(self, db: AsyncSession, event: MarketEvent | None) -> str:
        return await self._mutate(db, lambda draft: controls.trigger_event(draft, event))

    async def freeze_market(self, db: AsyncSession, duration_minutes: int) -> str:
        return await self._mutate(
            db,
            lambda draft: controls.freeze_market(
                draft, duration_minutes, self.now(), self._max_freeze_minutes
            ),
        )

    async def reset(self, db: AsyncSession, after_save: AfterSave | None = None) -> str:
        """Rebuild from the catalog. `after_save` runs in the same transaction
        (used to wipe every team's holdings)."""
        return await self._mutate(
            db, lambda draft: "Market reset to round 0", after_save, fresh=True
        )

    async def expire_freeze_if_due(self, db: AsyncSession) -> bool:
        """Lazy expiry of a timed market freeze; cheap when nothing is due."""
        if not self._state.freeze_expired(self.now()):
            return False

        def apply(draft: MarketState) -> str:
            controls.expire_freeze(draft, self.now())
            return "Market freeze expired"

        await self._mutate(db, apply)
        return True

    # ------------------------------------------------------------------

    async def _mutate(
        self,
        db: AsyncSession,
        apply: Callable[[MarketState], str],
        after_save: AfterSave | None = None,
        fresh: bool = False,
    ) -> str:
        async with self._lock:
            if fresh:
                self._resetting = True
                draft = controls.reset_state(self._catalog)
            else:
                # Items are immutable; share them instead of copying
                memo = {id(s.item): s.item for s in self._state.items.values()}
                draft = copy.deepcopy(self._state, memo)
            message = apply(draft)
            try:
                await self._repo.save_state(db, draft)
                if after_save is not None:
                    await after_save(db)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
            finally:
                self._resetting = False
            self._state = draft
            if fresh:
                self._generation += 1
        logger.info("Market: %s", message)
        return message

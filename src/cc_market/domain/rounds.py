"""Round advancement: the single global clock of the market.

effective_bps = canonical round change + event overlay + staged admin extra
new_price     = max(min_price, round2(current × (1 + effective_bps / 10000)))

All items move to the new round together: every new value is computed
before any item is written.
"""

import logging
from dataclasses import dataclass

from src.cc_common.credits import apply_bps
from src.cc_common.enums import EVENT_OVERLAY_BPS, MarketEvent
from src.cc_common.errors import RoundLimitReachedError
from src.cc_market.domain.models import ItemRuntimeState, MarketState, NewsEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceMove:
    item_id: str
    effective_bps: int
    price_after: int
    news: str


def event_overlay_bps(event: MarketEvent | None) -> int:
    return EVENT_OVERLAY_BPS[event] if event is not None else 0


def compute_move(
    item_state: ItemRuntimeState,
    round_no: int,
    overlay_bps: int,
    min_price_cents: int,
) -> PriceMove:
    canonical = item_state.item.change_for_round(round_no)
    effective = canonical.change_bps + overlay_bps + item_state.admin_extra_bps
    new_price = max(min_price_cents, apply_bps(item_state.current_price, effective))
    return PriceMove(
        item_id=item_state.item.id,
        effective_bps=effective,
        price_after=new_price,
        news=canonical.news,
    )


def advance_round(state: MarketState, min_price_cents: int) -> list[PriceMove]:
    """Advance `state` in place by one round. Raises before touching anything
    when the final round has already been played."""
    if state.current_round >= state.total_rounds:
        raise RoundLimitReachedError(state.total_rounds)

    round_no = state.current_round + 1
    overlay = event_overlay_bps(state.active_event)
    moves = [
        compute_move(item_state, round_no, overlay, min_price_cents)
        for item_state in state.items.values()
    ]

    for move in moves:
        item_state = state.items[move.item_id]
        item_state.price_history.append(move.price_after)
        item_state.news_history.append(
            NewsEntry(
                round=round_no,
                news=move.news,
                change_bps=move.effective_bps,
                price_after=move.price_after,
            )
        )
        item_state.change_bps = move.effective_bps
        item_state.admin_extra_bps = 0
    state.current_round = round_no

    logger.info(
        "Advanced to round %d/%d (event=%s, overlay=%d bps)",
        round_no,
        state.total_rounds,
        state.active_event.value if state.active_event else None,
        overlay,
    )
    return moves

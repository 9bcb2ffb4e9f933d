"""Admin controls: out-of-band mutations of a MarketState.

Each function mutates the state it is given and returns a human-readable
status message. Validation happens before any field is written.
"""

from datetime import datetime

from src.cc_catalog.domain.models import Catalog
from src.cc_common.credits import bps_to_percent
from src.cc_common.datetime_utils import minutes_after
from src.cc_common.enums import MarketEvent
from src.cc_common.errors import (
    InvalidDurationError,
    InvalidPercentError,
    ItemNotFoundError,
)
from src.cc_market.domain.models import ItemRuntimeState, MarketState

MAX_ADJUST_BPS = 10_000   # ±100% per staged adjustment


def get_item_state(state: MarketState, item_id: str) -> ItemRuntimeState:
    item_state = state.items.get(item_id)
    if item_state is None:
        raise ItemNotFoundError(item_id)
    return item_state


def set_item_frozen(state: MarketState, item_id: str, frozen: bool) -> str:
    item_state = get_item_state(state, item_id)
    item_state.is_frozen = frozen
    verb = "frozen" if frozen else "unfrozen"
    return f"{item_state.item.symbol} {verb}"


def stage_adjustment(state: MarketState, item_id: str, extra_bps: int) -> str:
    """Stage an extra change for the next round. Last write wins."""
    if not (-MAX_ADJUST_BPS <= extra_bps <= MAX_ADJUST_BPS):
        raise InvalidPercentError(extra_bps, MAX_ADJUST_BPS)
    item_state = get_item_state(state, item_id)
    item_state.admin_extra_bps = extra_bps
    return (
        f"{item_state.item.symbol} will move an extra "
        f"{bps_to_percent(extra_bps):+.2f}% next round"
    )


def trigger_event(state: MarketState, event: MarketEvent | None) -> str:
    if event is None:
        state.active_event = None
        state.event_round = None
        return "Market event cleared"
    state.active_event = event
    state.event_round = state.current_round
    return f"{event.value} event active from round {state.current_round + 1}"


def freeze_market(
    state: MarketState, duration_minutes: int, now: datetime, max_minutes: int
) -> str:
    if not (0 <= duration_minutes <= max_minutes):
        raise InvalidDurationError(duration_minutes, max_minutes)
    if duration_minutes == 0:
        state.market_frozen = False
        state.market_freeze_until = None
        return "Market unfrozen"
    state.market_frozen = True
    state.market_freeze_until = minutes_after(now, duration_minutes)
    return f"Market frozen for {duration_minutes} minutes"


def expire_freeze(state: MarketState, now: datetime) -> bool:
    """Clear an elapsed market freeze. Returns True if anything changed."""
    if not state.freeze_expired(now):
        return False
    state.market_frozen = False
    state.market_freeze_until = None
    return True


def reset_state(catalog: Catalog) -> MarketState:
    return MarketState.initial(catalog)

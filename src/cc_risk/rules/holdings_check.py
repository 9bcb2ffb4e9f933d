from src.cc_account.domain.models import Holding
from src.cc_common.errors import InsufficientHoldingsError


def check_holdings(holding: Holding | None, item_id: str, quantity: int) -> Holding:
    """Return the holding if it covers `quantity`, else raise."""
    held = holding.quantity if holding is not None else 0
    if holding is None or held < quantity:
        raise InsufficientHoldingsError(item_id, quantity, held)
    return holding

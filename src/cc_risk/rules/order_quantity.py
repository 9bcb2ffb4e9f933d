from config.settings import settings
from src.cc_common.errors import InvalidQuantityError


def check_quantity(quantity: int, max_quantity: int | None = None) -> None:
    """Raise InvalidQuantityError if quantity is not in [1, max_quantity].

    max_quantity defaults to settings.MAX_TRADE_QUANTITY.
    """
    limit = settings.MAX_TRADE_QUANTITY if max_quantity is None else max_quantity
    if not (1 <= quantity <= limit):
        raise InvalidQuantityError(quantity, limit)

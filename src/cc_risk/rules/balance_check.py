from src.cc_common.errors import InsufficientBalanceError


def check_balance(cost: int, balance: int) -> None:
    """Raise InsufficientBalanceError when cost exceeds balance by even one cent."""
    if cost > balance:
        raise InsufficientBalanceError(cost, balance)

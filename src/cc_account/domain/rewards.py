"""Balance arithmetic for quiz/game rewards and penalties."""

from src.cc_common.errors import InvalidAmountError


def reward_credit(amount: int, max_amount: int) -> int:
    if amount <= 0 or amount > max_amount:
        raise InvalidAmountError(amount, max_amount)
    return amount


def penalty_debit(balance: int, penalty: int) -> int:
    """Amount actually taken: a penalty never drives the balance below 0."""
    if penalty <= 0:
        raise InvalidAmountError(penalty)
    return min(balance, penalty)

"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Validation     (caller-fixable input, HTTP 422)
  2xxx: State conflict (frozen, round limit, insufficient funds, HTTP 409)
  3xxx: Not found      (unknown item / team, HTTP 404)
  4xxx: Auth           (identity resolution at the gateway)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


class ValidationError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class StateConflictError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 409)


class NotFoundError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 404)


# --- 1xxx: Validation ---

class InvalidQuantityError(ValidationError):
    def __init__(self, quantity: int, max_quantity: int) -> None:
        super().__init__(
            1001, f"Quantity {quantity} must be in [1, {max_quantity}]"
        )


class InvalidPercentError(ValidationError):
    def __init__(self, bps: int, limit_bps: int) -> None:
        super().__init__(
            1002,
            f"Adjustment {bps} bps out of range [-{limit_bps}, {limit_bps}]",
        )


class InvalidDurationError(ValidationError):
    def __init__(self, minutes: int, max_minutes: int) -> None:
        super().__init__(
            1003, f"Freeze duration {minutes} min must be in [0, {max_minutes}]"
        )


class InvalidAmountError(ValidationError):
    def __init__(self, amount: int, max_amount: int | None = None) -> None:
        if max_amount is None:
            detail = f"Amount must be positive, got {amount} cents"
        else:
            detail = f"Amount must be between 1 and {max_amount} cents, got {amount}"
        super().__init__(1004, detail)


# --- 2xxx: State conflict ---

class MarketFrozenError(StateConflictError):
    def __init__(self) -> None:
        super().__init__(2001, "Market is frozen: trading is temporarily halted")


class ItemFrozenError(StateConflictError):
    def __init__(self, item_id: str) -> None:
        super().__init__(2002, f"Trading in {item_id} is frozen")


class RoundLimitReachedError(StateConflictError):
    def __init__(self, total_rounds: int) -> None:
        super().__init__(2003, f"All {total_rounds} rounds have been played")


class InsufficientBalanceError(StateConflictError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            2004,
            f"Insufficient balance: required {required} cents, available {available} cents",
        )


class InsufficientHoldingsError(StateConflictError):
    def __init__(self, item_id: str, requested: int, held: int) -> None:
        super().__init__(
            2005,
            f"Insufficient holdings in {item_id}: requested {requested}, held {held}",
        )


class MarketResetError(StateConflictError):
    def __init__(self) -> None:
        super().__init__(2006, "Market was reset while the trade was in progress; retry")


# --- 3xxx: Not found ---

class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: str) -> None:
        super().__init__(3001, f"Item not found: {item_id}")


class TeamNotFoundError(NotFoundError):
    def __init__(self, team_id: str) -> None:
        super().__init__(3002, f"Team not found: {team_id}")


# --- 4xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(4001, "Invalid or expired token", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(4003, "Admin privileges required", 403)


class CollaboratorRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(4004, "Service or admin token required", 403)


# --- 9xxx: System ---

class CatalogError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Invalid item catalog: {detail}", 500)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)

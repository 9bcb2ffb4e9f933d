"""AccountRepository: concrete implementation of AccountRepositoryProtocol.

Per-team serialization in the database comes from `SELECT ... FOR UPDATE` on
the team's account row (see lock_account); every balance/holding write for a
team happens while that row lock is held.

Transaction ownership: The CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_account.domain.models import Holding, TeamAccount, Transaction
from src.cc_common.errors import InternalError, TeamNotFoundError

# ---------------------------------------------------------------------------
# SQL: accounts
# ---------------------------------------------------------------------------

_OPEN_ACCOUNT_SQL = text("""
    INSERT INTO team_accounts (team_id, balance)
    VALUES (:team_id, :balance)
    ON CONFLICT (team_id) DO NOTHING
""")

_GET_ACCOUNT_SQL = text("""
    SELECT team_id, balance, created_at, updated_at
    FROM team_accounts
    WHERE team_id = :team_id
""")

_LOCK_ACCOUNT_SQL = text("""
    SELECT team_id, balance, created_at, updated_at
    FROM team_accounts
    WHERE team_id = :team_id
    FOR UPDATE
""")

_UPDATE_BALANCE_SQL = text("""
    UPDATE team_accounts
    SET balance = :balance,
        updated_at = NOW()
    WHERE team_id = :team_id
    RETURNING team_id, balance, created_at, updated_at
""")

# ---------------------------------------------------------------------------
# SQL: holdings
# ---------------------------------------------------------------------------

_GET_HOLDING_SQL = text("""
    SELECT team_id, item_id, quantity, avg_buy_price
    FROM holdings
    WHERE team_id = :team_id AND item_id = :item_id
""")

_LIST_HOLDINGS_SQL = text("""
    SELECT team_id, item_id, quantity, avg_buy_price
    FROM holdings
    WHERE team_id = :team_id
    ORDER BY item_id
""")

_UPSERT_HOLDING_SQL = text("""
    INSERT INTO holdings (team_id, item_id, quantity, avg_buy_price)
    VALUES (:team_id, :item_id, :quantity, :avg_buy_price)
    ON CONFLICT (team_id, item_id) DO UPDATE SET
        quantity      = EXCLUDED.quantity,
        avg_buy_price = EXCLUDED.avg_buy_price,
        updated_at    = NOW()
""")

_DELETE_HOLDING_SQL = text("""
    DELETE FROM holdings WHERE team_id = :team_id AND item_id = :item_id
""")

# Waits for in-flight trade writes and blocks new ones until the reset commits
_LOCK_HOLDINGS_SQL = text("LOCK TABLE holdings IN EXCLUSIVE MODE")

_DELETE_ALL_HOLDINGS_SQL = text("DELETE FROM holdings")

# ---------------------------------------------------------------------------
# SQL: transactions (append-only)
# ---------------------------------------------------------------------------

_INSERT_TRANSACTION_SQL = text("""
    INSERT INTO transactions
        (team_id, tx_type, label, item_id, quantity, amount, balance_after,
         reference_id)
    VALUES
        (:team_id, :tx_type, :label, :item_id, :quantity, :amount, :balance_after,
         :reference_id)
    RETURNING id, team_id, tx_type, label, item_id, quantity, amount,
              balance_after, reference_id, created_at
""")

_FIND_BY_REFERENCE_SQL = text("""
    SELECT id, team_id, tx_type, label, item_id, quantity, amount,
           balance_after, reference_id, created_at
    FROM transactions
    WHERE team_id = :team_id AND tx_type = :tx_type AND reference_id = :reference_id
""")

_LIST_TRANSACTIONS_SQL = text("""
    SELECT id, team_id, tx_type, label, item_id, quantity, amount,
           balance_after, reference_id, created_at
    FROM transactions
    WHERE team_id = :team_id
      AND (CAST(:cursor_id AS BIGINT) IS NULL OR id < :cursor_id)
      AND (CAST(:tx_type AS VARCHAR) IS NULL OR tx_type = :tx_type)
    ORDER BY id DESC
    LIMIT :limit
""")


def _row_to_account(row: object) -> TeamAccount:
    return TeamAccount(
        team_id=row.team_id,  # type: ignore[attr-defined]
        balance=row.balance,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_holding(row: object) -> Holding:
    return Holding(
        team_id=row.team_id,  # type: ignore[attr-defined]
        item_id=row.item_id,  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        avg_buy_price=row.avg_buy_price,  # type: ignore[attr-defined]
    )


def _row_to_transaction(row: object) -> Transaction:
    return Transaction(
        id=row.id,  # type: ignore[attr-defined]
        team_id=row.team_id,  # type: ignore[attr-defined]
        tx_type=row.tx_type,  # type: ignore[attr-defined]
        label=row.label,  # type: ignore[attr-defined]
        item_id=row.item_id,  # type: ignore[attr-defined]
        quantity=row.quantity,  # type: ignore[attr-defined]
        amount=row.amount,  # type: ignore[attr-defined]
        balance_after=row.balance_after,  # type: ignore[attr-defined]
        reference_id=row.reference_id,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class AccountRepository:
    """Concrete repository: raw SQL over team_accounts / holdings / transactions."""

    async def get_account(self, db: AsyncSession, team_id: str) -> TeamAccount | None:
        row = (await db.execute(_GET_ACCOUNT_SQL, {"team_id": team_id})).fetchone()
        return _row_to_account(row) if row else None

    async def lock_account(
        self, db: AsyncSession, team_id: str, starting_balance: int
    ) -> TeamAccount:
        await db.execute(_OPEN_ACCOUNT_SQL, {"team_id": team_id, "balance": starting_balance})
        row = (await db.execute(_LOCK_ACCOUNT_SQL, {"team_id": team_id})).fetchone()
        if row is None:
            raise InternalError(f"Account row missing after open for team {team_id}")
        return _row_to_account(row)

    async def update_balance(
        self, db: AsyncSession, team_id: str, balance: int
    ) -> TeamAccount:
        row = (
            await db.execute(_UPDATE_BALANCE_SQL, {"team_id": team_id, "balance": balance})
        ).fetchone()
        if row is None:
            raise TeamNotFoundError(team_id)
        return _row_to_account(row)

    async def get_holding(
        self, db: AsyncSession, team_id: str, item_id: str
    ) -> Holding | None:
        row = (
            await db.execute(_GET_HOLDING_SQL, {"team_id": team_id, "item_id": item_id})
        ).fetchone()
        return _row_to_holding(row) if row else None

    async def list_holdings(self, db: AsyncSession, team_id: str) -> list[Holding]:
        rows = (await db.execute(_LIST_HOLDINGS_SQL, {"team_id": team_id})).fetchall()
        return [_row_to_holding(r) for r in rows]

    async def save_holding(self, db: AsyncSession, holding: Holding) -> None:
        await db.execute(
            _UPSERT_HOLDING_SQL,
            {
                "team_id": holding.team_id,
                "item_id": holding.item_id,
                "quantity": holding.quantity,
                "avg_buy_price": holding.avg_buy_price,
            },
        )

    async def delete_holding(self, db: AsyncSession, team_id: str, item_id: str) -> None:
        await db.execute(_DELETE_HOLDING_SQL, {"team_id": team_id, "item_id": item_id})

    async def delete_all_holdings(self, db: AsyncSession) -> int:
        await db.execute(_LOCK_HOLDINGS_SQL)
        result = await db.execute(_DELETE_ALL_HOLDINGS_SQL)
        return int(result.rowcount or 0)  # type: ignore[attr-defined]

    async def append_transaction(
        self,
        db: AsyncSession,
        team_id: str,
        tx_type: str,
        label: str,
        quantity: int,
        amount: int,
        balance_after: int,
        item_id: str | None = None,
        reference_id: str | None = None,
    ) -> Transaction:
        row = (
            await db.execute(
                _INSERT_TRANSACTION_SQL,
                {
                    "team_id": team_id,
                    "tx_type": tx_type,
                    "label": label,
                    "item_id": item_id,
                    "quantity": quantity,
                    "amount": amount,
                    "balance_after": balance_after,
                    "reference_id": reference_id,
                },
            )
        ).fetchone()
        if row is None:
            raise InternalError("Transaction insert returned no rows: this should never happen")
        return _row_to_transaction(row)

    async def find_transaction_by_reference(
        self, db: AsyncSession, team_id: str, tx_type: str, reference_id: str
    ) -> Transaction | None:
        row = (
            await db.execute(
                _FIND_BY_REFERENCE_SQL,
                {"team_id": team_id, "tx_type": tx_type, "reference_id": reference_id},
            )
        ).fetchone()
        return _row_to_transaction(row) if row else None

    async def list_transactions(
        self,
        db: AsyncSession,
        team_id: str,
        cursor_id: int | None,
        limit: int,
        tx_type: str | None,
    ) -> list[Transaction]:
        rows = (
            await db.execute(
                _LIST_TRANSACTIONS_SQL,
                {
                    "team_id": team_id,
                    "cursor_id": cursor_id,
                    "limit": limit,
                    "tx_type": tx_type,
                },
            )
        ).fetchall()
        return [_row_to_transaction(r) for r in rows]

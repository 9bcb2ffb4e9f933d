"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_account.domain.models import Holding, TeamAccount, Transaction


class AccountRepositoryProtocol(Protocol):
    async def get_account(
        self, db: AsyncSession, team_id: str
    ) -> TeamAccount | None: ...

    async def lock_account(
        self, db: AsyncSession, team_id: str, starting_balance: int
    ) -> TeamAccount:
        """Open the account if missing, then row-lock it until commit."""
        ...

    async def update_balance(
        self, db: AsyncSession, team_id: str, balance: int
    ) -> TeamAccount: ...

    async def get_holding(
        self, db: AsyncSession, team_id: str, item_id: str
    ) -> Holding | None: ...

    async def list_holdings(self, db: AsyncSession, team_id: str) -> list[Holding]: ...

    async def save_holding(self, db: AsyncSession, holding: Holding) -> None: ...

    async def delete_holding(
        self, db: AsyncSession, team_id: str, item_id: str
    ) -> None: ...

    async def delete_all_holdings(self, db: AsyncSession) -> int: ...

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
    ) -> Transaction: ...

    async def find_transaction_by_reference(
        self, db: AsyncSession, team_id: str, tx_type: str, reference_id: str
    ) -> Transaction | None: ...

    async def list_transactions(
        self,
        db: AsyncSession,
        team_id: str,
        cursor_id: int | None,
        limit: int,
        tx_type: str | None,
    ) -> list[Transaction]: ...

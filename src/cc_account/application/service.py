"""AccountApplicationService: balances, transaction log, rewards, penalties.

Rewards and penalties are pushed by the quiz and mini-game collaborators.
Each carries a reference id (question id, game round id) and is applied at
most once per team and transaction type: a repeat returns the first
transaction with applied=False. A quiz reward and a penalty may share a
reference id. Rewards are capped at MAX_REWARD_CENTS each.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_account.application.schemas import (
    BalanceChangeResponse,
    BalanceResponse,
    TransactionItem,
    TransactionListResponse,
    cursor_decode,
    cursor_encode,
)
from src.cc_account.domain.models import Transaction
from src.cc_account.domain.repository import AccountRepositoryProtocol
from src.cc_account.domain.rewards import penalty_debit, reward_credit
from src.cc_account.infrastructure.persistence import AccountRepository
from src.cc_common.credits import cents_to_display
from src.cc_common.enums import RewardKind, TransactionType

logger = logging.getLogger(__name__)


class AccountApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        starting_balance: int | None = None,
        max_reward: int | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._starting_balance = (
            settings.STARTING_BALANCE_CENTS if starting_balance is None else starting_balance
        )
        self._max_reward = settings.MAX_REWARD_CENTS if max_reward is None else max_reward

    async def get_balance(self, db: AsyncSession, team_id: str) -> BalanceResponse:
        account = await self._repo.get_account(db, team_id)
        balance = account.balance if account else self._starting_balance
        return BalanceResponse.from_cents(team_id, balance)

    async def list_transactions(
        self,
        db: AsyncSession,
        team_id: str,
        cursor: str | None,
        limit: int,
        tx_type: str | None,
    ) -> TransactionListResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        entries = await self._repo.list_transactions(
            db, team_id, cursor_id, limit + 1, tx_type
        )
        has_more = len(entries) > limit
        page = entries[:limit]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return TransactionListResponse(
            items=[TransactionItem.from_domain(t) for t in page],
            next_cursor=next_cursor,
            has_more=has_more,
        )

    async def apply_reward(
        self,
        db: AsyncSession,
        team_id: str,
        kind: RewardKind,
        label: str,
        amount: int,
        reference_id: str,
    ) -> BalanceChangeResponse:
        credit = reward_credit(amount, self._max_reward)
        tx_type = TransactionType(kind.value).value
        try:
            account = await self._repo.lock_account(db, team_id, self._starting_balance)
            existing = await self._repo.find_transaction_by_reference(
                db, team_id, tx_type, reference_id
            )
            if existing is not None:
                await db.commit()
                logger.info("Reward idempotency hit: team=%s ref=%s", team_id, reference_id)
                return _unchanged(existing, account.balance)

            new_balance = account.balance + credit
            await self._repo.update_balance(db, team_id, new_balance)
            entry = await self._repo.append_transaction(
                db,
                team_id=team_id,
                tx_type=tx_type,
                label=label,
                quantity=1,
                amount=credit,
                balance_after=new_balance,
                reference_id=reference_id,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return _applied(entry)

    async def apply_penalty(
        self,
        db: AsyncSession,
        team_id: str,
        label: str,
        amount: int,
        reference_id: str,
    ) -> BalanceChangeResponse:
        try:
            account = await self._repo.lock_account(db, team_id, self._starting_balance)
            existing = await self._repo.find_transaction_by_reference(
                db, team_id, TransactionType.PENALTY.value, reference_id
            )
            if existing is not None:
                await db.commit()
                logger.info("Penalty idempotency hit: team=%s ref=%s", team_id, reference_id)
                return _unchanged(existing, account.balance)

            debit = penalty_debit(account.balance, amount)
            new_balance = account.balance - debit
            await self._repo.update_balance(db, team_id, new_balance)
            entry = await self._repo.append_transaction(
                db,
                team_id=team_id,
                tx_type=TransactionType.PENALTY.value,
                label=label,
                quantity=1,
                amount=-debit,
                balance_after=new_balance,
                reference_id=reference_id,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return _applied(entry)


def _applied(entry: Transaction) -> BalanceChangeResponse:
    return BalanceChangeResponse(
        applied=True,
        amount_cents=entry.amount,
        balance_cents=entry.balance_after,
        balance_display=cents_to_display(entry.balance_after),
        transaction_id=entry.id,
    )


def _unchanged(existing: Transaction, balance: int) -> BalanceChangeResponse:
    return BalanceChangeResponse(
        applied=False,
        amount_cents=0,
        balance_cents=balance,
        balance_display=cents_to_display(balance),
        transaction_id=existing.id,
    )

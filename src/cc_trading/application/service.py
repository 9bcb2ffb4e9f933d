"""TradeApplicationService: buy/sell against the engine's current price.

Critical section per team (asyncio.Lock keyed by team id, plus the account
row lock in PostgreSQL): read price → check → write balance, holding and
transaction → commit. The price comes from the engine's live snapshot, which
is swapped whole on round advance, so a fill sees either all pre-round or all
post-round prices. A market reset that lands mid-trade rolls the trade back
(MarketResetError) so no holding survives the wipe.

Trades are not idempotent. A caller that times out must reconcile through
the portfolio view instead of retrying.
"""

import asyncio
import logging
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cc_account.domain.repository import AccountRepositoryProtocol
from src.cc_account.infrastructure.persistence import AccountRepository
from src.cc_market.domain.controls import get_item_state
from src.cc_market.engine.engine import MarketEngine
from src.cc_risk.rules.order_quantity import check_quantity
from src.cc_risk.rules.trading_halt import check_item_tradable, check_market_open
from src.cc_trading.application.schemas import TradeResponse
from src.cc_trading.domain.fills import fill_buy, fill_sell

logger = logging.getLogger(__name__)


class TradeApplicationService:
    def __init__(
        self,
        repo: AccountRepositoryProtocol | None = None,
        starting_balance: int | None = None,
        max_quantity: int | None = None,
    ) -> None:
        self._repo: AccountRepositoryProtocol = repo or AccountRepository()
        self._starting_balance = (
            settings.STARTING_BALANCE_CENTS if starting_balance is None else starting_balance
        )
        self._max_quantity = (
            settings.MAX_TRADE_QUANTITY if max_quantity is None else max_quantity
        )
        self._team_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def buy(
        self,
        engine: MarketEngine,
        db: AsyncSession,
        team_id: str,
        item_id: str,
        quantity: int,
    ) -> TradeResponse:
        return await self._execute(engine, db, team_id, item_id, quantity, is_buy=True)

    async def sell(
        self,
        engine: MarketEngine,
        db: AsyncSession,
        team_id: str,
        item_id: str,
        quantity: int,
    ) -> TradeResponse:
        return await self._execute(engine, db, team_id, item_id, quantity, is_buy=False)

    async def _execute(
        self,
        engine: MarketEngine,
        db: AsyncSession,
        team_id: str,
        item_id: str,
        quantity: int,
        is_buy: bool,
    ) -> TradeResponse:
        async with self._team_locks[team_id]:
            check_quantity(quantity, self._max_quantity)
            await engine.expire_freeze_if_due(db)

            generation = engine.trading_generation()
            state = engine.state
            item_state = get_item_state(state, item_id)
            check_market_open(state, engine.now())
            check_item_tradable(item_state)
            price = item_state.current_price

            try:
                account = await self._repo.lock_account(db, team_id, self._starting_balance)
                holding = await self._repo.get_holding(db, team_id, item_id)
                fill_fn = fill_buy if is_buy else fill_sell
                fill = fill_fn(team_id, item_id, account.balance, holding, price, quantity)

                await self._repo.update_balance(db, team_id, fill.balance_after)
                if fill.holding_after is not None:
                    await self._repo.save_holding(db, fill.holding_after)
                else:
                    await self._repo.delete_holding(db, team_id, item_id)
                entry = await self._repo.append_transaction(
                    db,
                    team_id=team_id,
                    tx_type=fill.side.value,
                    label=item_state.item.symbol,
                    quantity=quantity,
                    amount=fill.amount,
                    balance_after=fill.balance_after,
                    item_id=item_id,
                )
                # A reset that landed while this fill was being written has
                # already wiped holdings priced against the old market
                engine.check_generation(generation)
                await db.commit()
            except Exception:
                await db.rollback()
                raise

        logger.info(
            "Fill %s team=%s item=%s qty=%d price=%d balance_after=%d",
            fill.side.value,
            team_id,
            item_id,
            quantity,
            price,
            fill.balance_after,
        )
        return TradeResponse.from_fill(fill, item_state.item.symbol, entry.id)

"""MarketApplicationService: read side of the market.

Every read first applies lazy freeze expiry, then renders the live snapshot.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_market.application.schemas import MarketDataResponse
from src.cc_market.engine.engine import MarketEngine


class MarketApplicationService:
    async def get_market_data(
        self, engine: MarketEngine, db: AsyncSession
    ) -> MarketDataResponse:
        await engine.expire_freeze_if_due(db)
        return MarketDataResponse.from_state(engine.state, engine.now())

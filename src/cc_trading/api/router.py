"""cc_trading REST API: team-scoped buy/sell.

POST /trade/buy   {item_id, quantity} → {message, new_balance, ...}
POST /trade/sell  {item_id, quantity} → {message, new_balance, ...}
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_common.database import get_db_session
from src.cc_common.response import ApiResponse, success_response
from src.cc_gateway.auth.dependencies import TeamPrincipal, get_current_team
from src.cc_market.engine.engine import MarketEngine
from src.cc_market.engine.provider import get_market_engine
from src.cc_trading.application.schemas import TradeRequest
from src.cc_trading.application.service import TradeApplicationService

router = APIRouter(prefix="/trade", tags=["trade"])

_service = TradeApplicationService()


@router.post("/buy")
async def buy(
    body: TradeRequest,
    request: Request,
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.buy(
        engine, db, current_team.team_id, body.item_id, body.quantity
    )
    return success_response(result.model_dump(), request)


@router.post("/sell")
async def sell(
    body: TradeRequest,
    request: Request,
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.sell(
        engine, db, current_team.team_id, body.item_id, body.quantity
    )
    return success_response(result.model_dump(), request)

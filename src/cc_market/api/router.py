"""cc_market REST endpoints.

GET /market    full market snapshot (rounds, event, freeze, all items)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_common.database import get_db_session
from src.cc_common.response import ApiResponse, success_response
from src.cc_gateway.auth.dependencies import TeamPrincipal, get_current_team
from src.cc_market.application.service import MarketApplicationService
from src.cc_market.engine.engine import MarketEngine
from src.cc_market.engine.provider import get_market_engine

router = APIRouter(prefix="/market", tags=["market"])

_service = MarketApplicationService()


@router.get("")
async def get_market_data(
    request: Request,
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_market_data(engine, db)
    return success_response(result.model_dump(), request)

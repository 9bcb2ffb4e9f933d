"""cc_portfolio REST API: own portfolio and leaderboard data."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_common.database import get_db_session
from src.cc_common.response import ApiResponse, success_response
from src.cc_gateway.auth.dependencies import TeamPrincipal, get_current_team
from src.cc_market.engine.engine import MarketEngine
from src.cc_market.engine.provider import get_market_engine
from src.cc_portfolio.application.service import PortfolioApplicationService

router = APIRouter(tags=["portfolio"])

_service = PortfolioApplicationService()


@router.get("/portfolio")
async def get_portfolio(
    request: Request,
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_portfolio(engine, db, current_team.team_id)
    return success_response(result.model_dump(), request)


@router.get("/leaderboard")
async def get_leaderboard(
    request: Request,
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    engine: Annotated[MarketEngine, Depends(get_market_engine)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_leaderboard(engine, db)
    return success_response(result.model_dump(), request)

# src/cc_admin/api/router.py
"""Admin REST API. Every endpoint requires an admin token."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_admin.application.service import AdminService
from src.cc_common.database import get_db_session
from src.cc_common.enums import MarketEvent
from src.cc_common.response import ApiResponse, success_response
from src.cc_gateway.auth.dependencies import TeamPrincipal, require_admin
from src.cc_market.engine.engine import MarketEngine
from src.cc_market.engine.provider import get_market_engine
from src.cc_portfolio.application.service import PortfolioApplicationService

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()
_portfolio_service = PortfolioApplicationService()


class ItemFreezeRequest(BaseModel):
    frozen: bool


class AdjustPriceRequest(BaseModel):
    extra_bps: int   # e.g. 250 = +2.5% on top of next round's change


class EventRequest(BaseModel):
    event: MarketEvent | None   # null clears the active event


class MarketFreezeRequest(BaseModel):
    duration_minutes: int   # 0 unfreezes


AdminDep = Annotated[TeamPrincipal, Depends(require_admin)]
EngineDep = Annotated[MarketEngine, Depends(get_market_engine)]
DbDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.post("/market/advance-round")
async def advance_round(
    request: Request, admin: AdminDep, engine: EngineDep, db: DbDep
) -> ApiResponse:
    result = await _service.advance_round(engine, db)
    return success_response(result.model_dump(), request)


@router.post("/market/reset")
async def reset_market(
    request: Request, admin: AdminDep, engine: EngineDep, db: DbDep
) -> ApiResponse:
    result = await _service.reset_market(engine, db)
    return success_response(result.model_dump(), request)


@router.post("/market/items/{item_id}/freeze")
async def set_item_frozen(
    item_id: str,
    body: ItemFreezeRequest,
    request: Request,
    admin: AdminDep,
    engine: EngineDep,
    db: DbDep,
) -> ApiResponse:
    result = await _service.set_item_frozen(engine, db, item_id, body.frozen)
    return success_response(result.model_dump(), request)


@router.post("/market/items/{item_id}/adjust")
async def adjust_price(
    item_id: str,
    body: AdjustPriceRequest,
    request: Request,
    admin: AdminDep,
    engine: EngineDep,
    db: DbDep,
) -> ApiResponse:
    result = await _service.adjust_price(engine, db, item_id, body.extra_bps)
    return success_response(result.model_dump(), request)


@router.post("/market/event")
async def trigger_event(
    body: EventRequest,
    request: Request,
    admin: AdminDep,
    engine: EngineDep,
    db: DbDep,
) -> ApiResponse:
    result = await _service.trigger_event(engine, db, body.event)
    return success_response(result.model_dump(), request)


@router.post("/market/freeze")
async def freeze_market(
    body: MarketFreezeRequest,
    request: Request,
    admin: AdminDep,
    engine: EngineDep,
    db: DbDep,
) -> ApiResponse:
    result = await _service.freeze_market(engine, db, body.duration_minutes)
    return success_response(result.model_dump(), request)


@router.get("/teams/{team_id}/portfolio")
async def get_team_portfolio(
    team_id: str,
    request: Request,
    admin: AdminDep,
    engine: EngineDep,
    db: DbDep,
) -> ApiResponse:
    result = await _portfolio_service.get_portfolio(engine, db, team_id, must_exist=True)
    return success_response(result.model_dump(), request)

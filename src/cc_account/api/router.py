"""cc_account REST API: balance, transaction log, rewards, penalties."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.cc_account.application.schemas import PenaltyRequest, RewardRequest
from src.cc_account.application.service import AccountApplicationService
from src.cc_common.database import get_db_session
from src.cc_common.enums import TransactionType
from src.cc_common.response import ApiResponse, success_response
from src.cc_gateway.auth.dependencies import (
    TeamPrincipal,
    get_current_team,
    require_collaborator,
)

router = APIRouter(prefix="/account", tags=["account"])

_service = AccountApplicationService()


@router.get("/balance")
async def get_balance(
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_balance(db, current_team.team_id)
    return success_response(data.model_dump(), request)


@router.get("/transactions")
async def list_transactions(
    current_team: Annotated[TeamPrincipal, Depends(get_current_team)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    tx_type: TransactionType | None = Query(None, description="Filter by transaction type"),
) -> ApiResponse:
    data = await _service.list_transactions(
        db,
        current_team.team_id,
        cursor,
        limit,
        tx_type.value if tx_type else None,
    )
    return success_response(data.model_dump(), request)


@router.post("/rewards")
async def apply_reward(
    body: RewardRequest,
    collaborator: Annotated[TeamPrincipal, Depends(require_collaborator)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.apply_reward(
        db,
        body.team_id,
        body.kind,
        body.label,
        body.amount_cents,
        body.reference_id,
    )
    return success_response(data.model_dump(), request)


@router.post("/penalties")
async def apply_penalty(
    body: PenaltyRequest,
    collaborator: Annotated[TeamPrincipal, Depends(require_collaborator)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.apply_penalty(
        db,
        body.team_id,
        body.label,
        body.amount_cents,
        body.reference_id,
    )
    return success_response(data.model_dump(), request)

"""lm_payouts REST API — instructor's own connected account, JWT required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_common.database import get_db_session
from src.lm_common.response import ApiResponse, success_response
from src.lm_gateway.auth.dependencies import CurrentUser, get_current_user
from src.lm_payouts.application.service import PayoutApplicationService

router = APIRouter(prefix="/payouts", tags=["payouts"])

_service = PayoutApplicationService()


@router.post("/account/sync")
async def sync_account(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.sync_account_status(db, current_user.id)
    return success_response(data.model_dump(), request)


@router.get("/account/login-link")
async def login_link(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_dashboard_link(db, current_user.id)
    return success_response(data.model_dump(), request)

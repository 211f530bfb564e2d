"""lm_purchase REST API — the caller's library, JWT required."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_common.database import get_db_session
from src.lm_common.response import ApiResponse, success_response
from src.lm_gateway.auth.dependencies import CurrentUser, get_current_user
from src.lm_purchase.application.service import PurchaseApplicationService

router = APIRouter(prefix="/purchases", tags=["purchases"])

_service = PurchaseApplicationService()


@router.get("")
async def list_purchases(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await _service.list_library(db, current_user.id, cursor, limit)
    return success_response(data.model_dump(), request)

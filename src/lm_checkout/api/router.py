"""lm_checkout REST API — checkout creation and success-page verification."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_checkout.application.schemas import CreateCheckoutRequest
from src.lm_checkout.application.service import CheckoutApplicationService
from src.lm_common.database import get_db_session
from src.lm_common.response import ApiResponse, success_response
from src.lm_gateway.auth.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/checkout", tags=["checkout"])

_service = CheckoutApplicationService()


@router.post("/lessons")
async def create_lesson_checkout(
    body: CreateCheckoutRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_lesson_checkout(
        db, current_user, str(body.lesson_id), body.expected_price_cents
    )
    return success_response(data.model_dump(), request)


@router.get("/verify")
async def verify_checkout(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    session_id: str = Query(..., min_length=1, description="Checkout session id from the success redirect"),
) -> ApiResponse:
    data = await _service.verify_checkout(db, current_user, session_id)
    return success_response(data.model_dump(), request)

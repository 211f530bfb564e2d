"""lm_fees REST API — public, read-only fee quotes."""

from fastapi import APIRouter, Query, Request

from src.lm_common.response import ApiResponse, success_response
from src.lm_fees.application.service import FeeQuoteService

router = APIRouter(prefix="/fees", tags=["fees"])

_service = FeeQuoteService()


@router.get("/schedule")
async def get_schedule(request: Request) -> ApiResponse:
    return success_response(_service.get_schedule().model_dump(), request)


@router.get("/quote")
async def get_quote(
    request: Request,
    base_price_cents: int = Query(..., ge=0, description="Instructor base price in cents"),
) -> ApiResponse:
    return success_response(_service.quote(base_price_cents).model_dump(), request)

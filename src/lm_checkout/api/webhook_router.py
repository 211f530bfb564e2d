"""Stripe webhook endpoint — authenticated by signature, not by JWT."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_checkout.application.service import CheckoutApplicationService
from src.lm_common.database import get_db_session
from src.lm_common.errors import InvalidWebhookSignatureError
from src.lm_common.response import ApiResponse, success_response

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

_service = CheckoutApplicationService()


@router.post("/stripe")
async def stripe_webhook(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    stripe_signature: Annotated[str | None, Header(alias="Stripe-Signature")] = None,
) -> ApiResponse:
    if not stripe_signature:
        raise InvalidWebhookSignatureError()
    # Signature is computed over the raw body; do not parse before verifying
    payload = await request.body()
    data = await _service.handle_webhook(db, payload, stripe_signature)
    return success_response(data.model_dump(), request)

"""StripeGateway — PaymentGatewayProtocol over the official stripe SDK.

The SDK is synchronous; each call runs in a worker thread so request
handlers never block the event loop. Stripe errors surface as GatewayError.
Destination charges: the charge lands on the platform, the instructor's
connected account receives everything except application_fee_amount.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import stripe

from config.settings import settings
from src.lm_common.enums import WebhookEventType
from src.lm_common.errors import GatewayError, InvalidWebhookSignatureError
from src.lm_processor.domain.gateway import (
    CheckoutSession,
    CheckoutSessionRequest,
    ConnectedAccount,
    WebhookEvent,
)

logger = logging.getLogger(__name__)

_SESSION_EVENTS = frozenset({
    WebhookEventType.CHECKOUT_SESSION_COMPLETED.value,
    WebhookEventType.CHECKOUT_SESSION_ASYNC_PAYMENT_SUCCEEDED.value,
})


def _metadata(obj: Any) -> dict[str, str]:
    if not obj:
        return {}
    return {str(k): str(v) for k, v in obj.items()}


def _to_checkout_session(obj: Any) -> CheckoutSession:
    payment_intent = getattr(obj, "payment_intent", None)
    # payment_intent is an id string unless the caller expanded it
    if payment_intent is not None and not isinstance(payment_intent, str):
        payment_intent = payment_intent.id
    return CheckoutSession(
        id=obj.id,
        payment_status=obj.payment_status,
        amount_total=getattr(obj, "amount_total", None),
        url=getattr(obj, "url", None),
        payment_intent_id=payment_intent,
        metadata=_metadata(getattr(obj, "metadata", None)),
    )


def _to_connected_account(obj: Any) -> ConnectedAccount:
    return ConnectedAccount(
        id=obj.id,
        charges_enabled=bool(getattr(obj, "charges_enabled", False)),
        payouts_enabled=bool(getattr(obj, "payouts_enabled", False)),
        details_submitted=bool(getattr(obj, "details_submitted", False)),
        email=getattr(obj, "email", None),
    )


class StripeGateway:
    def __init__(
        self,
        api_key: str | None = None,
        webhook_secret: str | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.STRIPE_SECRET_KEY
        self._webhook_secret = (
            webhook_secret if webhook_secret is not None else settings.STRIPE_WEBHOOK_SECRET
        )

    async def _call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args, api_key=self._api_key, **kwargs)
        except stripe.StripeError as e:
            logger.error("Stripe call %s failed: %s", getattr(fn, "__qualname__", fn), e)
            raise GatewayError(getattr(e, "user_message", None) or str(e)) from e

    async def create_checkout_session(
        self, request: CheckoutSessionRequest
    ) -> CheckoutSession:
        product_data: dict[str, Any] = {"name": request.product_name}
        if request.product_description:
            product_data["description"] = request.product_description
        params: dict[str, Any] = {
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": request.currency,
                        "unit_amount": request.line_item_amount,
                        "product_data": product_data,
                    },
                    "quantity": 1,
                }
            ],
            "payment_intent_data": {
                "application_fee_amount": request.application_fee_amount,
                "transfer_data": {"destination": request.destination_account_id},
                "metadata": request.metadata,
            },
            "success_url": request.success_url,
            "cancel_url": request.cancel_url,
            "metadata": request.metadata,
        }
        if request.customer_email:
            params["customer_email"] = request.customer_email

        session = await self._call(stripe.checkout.Session.create, **params)
        return _to_checkout_session(session)

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        session = await self._call(stripe.checkout.Session.retrieve, session_id)
        return _to_checkout_session(session)

    async def retrieve_account(self, account_id: str) -> ConnectedAccount:
        account = await self._call(stripe.Account.retrieve, account_id)
        return _to_connected_account(account)

    async def create_login_link(self, account_id: str) -> str:
        link = await self._call(stripe.Account.create_login_link, account_id)
        return str(link.url)

    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent:
        """Verify the Stripe-Signature header and parse the event.

        Raises InvalidWebhookSignatureError on a bad signature or payload.
        """
        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            logger.warning("Rejected webhook payload: %s", e)
            raise InvalidWebhookSignatureError() from e

        obj = event.data.object
        if event.type in _SESSION_EVENTS:
            return WebhookEvent(id=event.id, type=event.type, checkout_session=_to_checkout_session(obj))
        if event.type == WebhookEventType.ACCOUNT_UPDATED.value:
            return WebhookEvent(id=event.id, type=event.type, account=_to_connected_account(obj))
        return WebhookEvent(id=event.id, type=event.type)

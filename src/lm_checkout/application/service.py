"""CheckoutApplicationService — checkout creation, verification, webhooks.

Every amount sent to the processor or written to the purchase ledger comes
from the fee engine:
  - checkout:   charge = compute_charge_amount(base), fee = split_fees(charge)
  - settlement: split_fees(amount_total) on the amount actually charged
Session metadata carries ids and the base price only, never fee amounts.

Settlement is shared by the redirect verification and the
checkout.session.completed / async_payment_succeeded webhooks; whichever
arrives first records the purchase, the rest hit the unique payment id and
return the same row.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.lm_catalog.domain.repository import LessonRepositoryProtocol
from src.lm_catalog.infrastructure.persistence import LessonRepository
from src.lm_checkout.application.schemas import (
    CheckoutResponse,
    VerifyCheckoutResponse,
    WebhookAckResponse,
)
from src.lm_common.enums import CheckoutPaymentStatus, PayoutStatus, WebhookEventType
from src.lm_common.errors import (
    InvalidCheckoutSessionError,
    LessonNotFoundError,
    PaymentNotCompletedError,
    PayoutAccountNotEnabledError,
    PriceMismatchError,
)
from src.lm_common.redis_client import claim_once, release
from src.lm_fees.domain.engine import compute_charge_amount, implied_base_price, split_fees
from src.lm_fees.domain.schedule import FeeSchedule
from src.lm_gateway.auth.dependencies import CurrentUser
from src.lm_payouts.application.service import PayoutApplicationService
from src.lm_processor.domain.gateway import (
    CheckoutSession,
    CheckoutSessionRequest,
    PaymentGatewayProtocol,
    WebhookEvent,
)
from src.lm_processor.infrastructure.stripe_gateway import StripeGateway
from src.lm_purchase.application.schemas import PurchaseItem
from src.lm_purchase.application.service import PurchaseApplicationService
from src.lm_purchase.domain.models import Purchase

logger = logging.getLogger(__name__)

_WEBHOOK_KEY_PREFIX = "webhook:stripe:"

_SETTLING_EVENTS = frozenset({
    WebhookEventType.CHECKOUT_SESSION_COMPLETED.value,
    WebhookEventType.CHECKOUT_SESSION_ASYNC_PAYMENT_SUCCEEDED.value,
})


def _parse_cents(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        cents = int(value)
    except ValueError:
        return None
    return cents if cents >= 0 else None


class CheckoutApplicationService:
    def __init__(
        self,
        lessons: LessonRepositoryProtocol | None = None,
        payouts: PayoutApplicationService | None = None,
        purchases: PurchaseApplicationService | None = None,
        gateway: PaymentGatewayProtocol | None = None,
        schedule: FeeSchedule | None = None,
    ) -> None:
        self._gateway: PaymentGatewayProtocol = gateway or StripeGateway()
        self._lessons: LessonRepositoryProtocol = lessons or LessonRepository()
        self._payouts = payouts or PayoutApplicationService(gateway=self._gateway)
        self._purchases = purchases or PurchaseApplicationService()
        self._schedule = schedule

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    async def create_lesson_checkout(
        self,
        db: AsyncSession,
        user: CurrentUser,
        lesson_id: str,
        expected_price_cents: int | None = None,
    ) -> CheckoutResponse:
        lesson = await self._lessons.get_lesson(db, lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        if expected_price_cents is not None and expected_price_cents != lesson.price_cents:
            raise PriceMismatchError(expected_price_cents, lesson.price_cents)

        # Instructors need a connected account even to publish free lessons
        account = await self._payouts.get_payout_account(db, lesson.instructor_id)

        if lesson.is_free:
            try:
                grant = await self._purchases.record_free_access(db, user.id, lesson.id)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
            return CheckoutResponse.for_free(lesson.id, PurchaseItem.from_domain(grant))

        if not account.can_receive_payments:
            raise PayoutAccountNotEnabledError(lesson.instructor_id)

        charge = compute_charge_amount(lesson.price_cents, self._schedule)
        split = split_fees(charge, self._schedule)
        base_url = settings.APP_BASE_URL.rstrip("/")
        session = await self._gateway.create_checkout_session(
            CheckoutSessionRequest(
                product_name=lesson.title,
                product_description=f"{lesson.title} (includes processing fees)",
                line_item_amount=charge,
                currency=settings.CURRENCY,
                destination_account_id=account.stripe_account_id,  # type: ignore[arg-type]
                application_fee_amount=split.platform_share,
                success_url=f"{base_url}/checkout/lesson-success?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{base_url}/lessons/{lesson.id}",
                customer_email=user.email,
                metadata={
                    "lesson_id": lesson.id,
                    "user_id": user.id,
                    "instructor_id": lesson.instructor_id,
                    "base_price_cents": str(lesson.price_cents),
                },
            )
        )
        logger.info(
            "Checkout session %s created: lesson=%s user=%s charge=%d platform=%d instructor=%d",
            session.id, lesson.id, user.id, charge,
            split.platform_share, split.counterparty_share,
        )
        return CheckoutResponse.for_paid(
            lesson_id=lesson.id,
            session_id=session.id,
            url=session.url,
            base_price=lesson.price_cents,
            charge=charge,
            split=split,
        )

    # ------------------------------------------------------------------
    # Settlement
    # ------------------------------------------------------------------

    async def _settle(self, db: AsyncSession, session: CheckoutSession) -> Purchase:
        """Record a paid session in the ledger. Runs in the caller's transaction."""
        if session.payment_status != CheckoutPaymentStatus.PAID.value:
            raise PaymentNotCompletedError(session.id, session.payment_status)
        lesson_id = session.metadata.get("lesson_id")
        user_id = session.metadata.get("user_id")
        if not lesson_id or not user_id:
            raise InvalidCheckoutSessionError(f"{session.id} has no lesson/user metadata")
        if session.amount_total is None:
            raise InvalidCheckoutSessionError(f"{session.id} has no amount_total")

        charge = session.amount_total
        split = split_fees(charge, self._schedule)
        base_price = _parse_cents(session.metadata.get("base_price_cents"))
        if base_price is None:
            base_price = max(implied_base_price(charge, self._schedule), 0)

        return await self._purchases.record_purchase(
            db,
            Purchase(
                user_id=user_id,
                lesson_id=lesson_id,
                stripe_payment_id=session.id,
                payment_intent_id=session.payment_intent_id,
                base_price_cents=base_price,
                amount_cents=charge,
                platform_fee_cents=split.platform_share,
                instructor_payout_cents=split.counterparty_share,
                payout_status=PayoutStatus.TRANSFERRED_ON_CHARGE.value,
            ),
        )

    async def verify_checkout(
        self, db: AsyncSession, user: CurrentUser, session_id: str
    ) -> VerifyCheckoutResponse:
        """Success-page verification: confirm payment and record the purchase."""
        session = await self._gateway.retrieve_checkout_session(session_id)
        owner = session.metadata.get("user_id")
        if owner is not None and owner != user.id:
            raise InvalidCheckoutSessionError(f"{session_id} belongs to another user")
        try:
            purchase = await self._settle(db, session)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return VerifyCheckoutResponse(
            success=True,
            lesson_id=purchase.lesson_id,
            purchase=PurchaseItem.from_domain(purchase),
        )

    # ------------------------------------------------------------------
    # Webhooks
    # ------------------------------------------------------------------

    async def handle_webhook(
        self, db: AsyncSession, payload: bytes, signature: str
    ) -> WebhookAckResponse:
        event = self._gateway.construct_event(payload, signature)
        key = f"{_WEBHOOK_KEY_PREFIX}{event.id}"
        if not await claim_once(key, settings.WEBHOOK_EVENT_TTL_SECONDS):
            logger.info("Webhook idempotency hit: event=%s type=%s", event.id, event.type)
            return WebhookAckResponse(
                event_id=event.id, event_type=event.type, handled=False, duplicate=True
            )

        try:
            handled = await self._dispatch(db, event)
            await db.commit()
        except Exception:
            await db.rollback()
            # Let the processor's redelivery retry this event
            await release(key)
            raise
        return WebhookAckResponse(event_id=event.id, event_type=event.type, handled=handled)

    async def _dispatch(self, db: AsyncSession, event: WebhookEvent) -> bool:
        if event.type in _SETTLING_EVENTS and event.checkout_session is not None:
            session = event.checkout_session
            if session.payment_status != CheckoutPaymentStatus.PAID.value:
                # Delayed methods settle on checkout.session.async_payment_succeeded
                logger.info(
                    "Checkout %s (%s) has payment_status=%s; not settling",
                    session.id, event.type, session.payment_status,
                )
                return False
            try:
                await self._settle(db, session)
            except InvalidCheckoutSessionError as e:
                logger.warning("Skipping checkout event %s: %s", event.id, e.message)
                return False
            return True

        if event.type == WebhookEventType.ACCOUNT_UPDATED.value and event.account is not None:
            await self._payouts.apply_account_update(db, event.account)
            return True

        logger.debug("Ignoring webhook event %s of type %s", event.id, event.type)
        return False

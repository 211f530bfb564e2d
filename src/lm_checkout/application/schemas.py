"""Pydantic schemas for lm_checkout API."""

from uuid import UUID

from pydantic import BaseModel, Field

from src.lm_common.cents import cents_to_display
from src.lm_fees.domain.engine import FeeSplit
from src.lm_purchase.application.schemas import PurchaseItem

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateCheckoutRequest(BaseModel):
    lesson_id: UUID
    # Price the client displayed; rejected if the catalog price has changed since
    expected_price_cents: int | None = Field(None, ge=0, description="Displayed base price in cents")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CheckoutResponse(BaseModel):
    lesson_id: str
    free: bool
    session_id: str | None = None
    url: str | None = None
    base_price_cents: int
    charge_amount_cents: int
    charge_amount_display: str
    platform_fee_cents: int
    instructor_payout_cents: int
    purchase: PurchaseItem | None = None

    @classmethod
    def for_paid(
        cls,
        lesson_id: str,
        session_id: str,
        url: str | None,
        base_price: int,
        charge: int,
        split: FeeSplit,
    ) -> "CheckoutResponse":
        return cls(
            lesson_id=lesson_id,
            free=False,
            session_id=session_id,
            url=url,
            base_price_cents=base_price,
            charge_amount_cents=charge,
            charge_amount_display=cents_to_display(charge),
            platform_fee_cents=split.platform_share,
            instructor_payout_cents=split.counterparty_share,
        )

    @classmethod
    def for_free(cls, lesson_id: str, purchase: PurchaseItem) -> "CheckoutResponse":
        return cls(
            lesson_id=lesson_id,
            free=True,
            base_price_cents=0,
            charge_amount_cents=0,
            charge_amount_display=cents_to_display(0),
            platform_fee_cents=0,
            instructor_payout_cents=0,
            purchase=purchase,
        )


class VerifyCheckoutResponse(BaseModel):
    success: bool
    lesson_id: str
    purchase: PurchaseItem


class WebhookAckResponse(BaseModel):
    event_id: str
    event_type: str
    handled: bool
    duplicate: bool = False

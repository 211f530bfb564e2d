"""Pydantic schemas for lm_purchase API."""

from pydantic import BaseModel

from src.lm_common.cents import cents_to_display
from src.lm_purchase.domain.models import Purchase


class PurchaseItem(BaseModel):
    id: str | None
    lesson_id: str
    stripe_payment_id: str
    is_free: bool
    amount_cents: int
    amount_display: str
    platform_fee_cents: int
    instructor_payout_cents: int
    instructor_payout_display: str
    payout_status: str
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, p: Purchase) -> "PurchaseItem":
        return cls(
            id=p.id,
            lesson_id=p.lesson_id,
            stripe_payment_id=p.stripe_payment_id,
            is_free=p.is_free,
            amount_cents=p.amount_cents,
            amount_display=cents_to_display(p.amount_cents),
            platform_fee_cents=p.platform_fee_cents,
            instructor_payout_cents=p.instructor_payout_cents,
            instructor_payout_display=cents_to_display(p.instructor_payout_cents),
            payout_status=p.payout_status,
            created_at=p.created_at.isoformat() if p.created_at else "",
        )


class LibraryResponse(BaseModel):
    items: list[PurchaseItem]
    next_cursor: str | None
    has_more: bool

"""Domain models for lm_purchase — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Purchase:
    user_id: str
    lesson_id: str
    stripe_payment_id: str            # checkout session id, or free_<hex> for free access
    base_price_cents: int             # instructor price at purchase time
    amount_cents: int                 # charged to the student, processor fees included
    platform_fee_cents: int
    instructor_payout_cents: int
    payout_status: str                # PayoutStatus value
    is_free: bool = False
    payment_intent_id: str | None = None
    id: str | None = None             # assigned by the DB
    created_at: datetime | None = None

    @property
    def is_balanced(self) -> bool:
        return self.platform_fee_cents + self.instructor_payout_cents == self.amount_cents

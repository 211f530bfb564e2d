"""Domain models for lm_payouts — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PayoutAccount:
    user_id: str                         # instructor
    stripe_account_id: str | None        # connected account, None until onboarding starts
    enabled: bool = False                # charges_enabled and payouts_enabled
    onboarding_complete: bool = False    # details_submitted
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def can_receive_payments(self) -> bool:
        return self.stripe_account_id is not None and self.enabled

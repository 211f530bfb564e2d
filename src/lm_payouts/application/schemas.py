"""Pydantic schemas for lm_payouts API."""

from pydantic import BaseModel

from src.lm_payouts.domain.models import PayoutAccount


class PayoutAccountStatusResponse(BaseModel):
    user_id: str
    stripe_account_id: str | None
    enabled: bool
    onboarding_complete: bool

    @classmethod
    def from_domain(cls, account: PayoutAccount) -> "PayoutAccountStatusResponse":
        return cls(
            user_id=account.user_id,
            stripe_account_id=account.stripe_account_id,
            enabled=account.enabled,
            onboarding_complete=account.onboarding_complete,
        )


class LoginLinkResponse(BaseModel):
    url: str

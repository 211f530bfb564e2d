"""Repository Protocol for instructor payout accounts."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_payouts.domain.models import PayoutAccount


class PayoutAccountRepositoryProtocol(Protocol):
    async def get_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> PayoutAccount | None: ...

    async def update_status(
        self, db: AsyncSession, user_id: str, enabled: bool, onboarding_complete: bool
    ) -> PayoutAccount | None: ...

    async def update_status_by_account_id(
        self,
        db: AsyncSession,
        stripe_account_id: str,
        enabled: bool,
        onboarding_complete: bool,
    ) -> PayoutAccount | None: ...

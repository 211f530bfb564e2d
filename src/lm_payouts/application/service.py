"""PayoutApplicationService — instructor connected-account status.

The processor is the source of truth for whether an instructor can be paid;
the local flags are a cache refreshed by sync_account_status and by the
account.updated webhook.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_common.errors import (
    InternalError,
    PayoutAccountNotEnabledError,
    PayoutAccountNotFoundError,
)
from src.lm_payouts.application.schemas import LoginLinkResponse, PayoutAccountStatusResponse
from src.lm_payouts.domain.models import PayoutAccount
from src.lm_payouts.domain.repository import PayoutAccountRepositoryProtocol
from src.lm_payouts.infrastructure.persistence import PayoutAccountRepository
from src.lm_processor.domain.gateway import ConnectedAccount, PaymentGatewayProtocol
from src.lm_processor.infrastructure.stripe_gateway import StripeGateway

logger = logging.getLogger(__name__)


class PayoutApplicationService:
    def __init__(
        self,
        repo: PayoutAccountRepositoryProtocol | None = None,
        gateway: PaymentGatewayProtocol | None = None,
    ) -> None:
        self._repo: PayoutAccountRepositoryProtocol = repo or PayoutAccountRepository()
        self._gateway: PaymentGatewayProtocol = gateway or StripeGateway()

    async def get_payout_account(self, db: AsyncSession, user_id: str) -> PayoutAccount:
        """Return the instructor's account; raise if none or no processor account id."""
        account = await self._repo.get_by_user_id(db, user_id)
        if account is None or not account.stripe_account_id:
            raise PayoutAccountNotFoundError(user_id)
        return account

    async def sync_account_status(
        self, db: AsyncSession, user_id: str
    ) -> PayoutAccountStatusResponse:
        account = await self.get_payout_account(db, user_id)
        remote = await self._gateway.retrieve_account(account.stripe_account_id)  # type: ignore[arg-type]
        try:
            updated = await self._repo.update_status(
                db, user_id, remote.is_enabled, remote.details_submitted
            )
            if updated is None:
                raise InternalError(f"Payout account vanished during sync: {user_id}")
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Synced payout account user=%s account=%s enabled=%s onboarding_complete=%s",
            user_id, remote.id, remote.is_enabled, remote.details_submitted,
        )
        return PayoutAccountStatusResponse.from_domain(updated)

    async def create_dashboard_link(self, db: AsyncSession, user_id: str) -> LoginLinkResponse:
        status = await self.sync_account_status(db, user_id)
        if not status.enabled:
            raise PayoutAccountNotEnabledError(user_id)
        url = await self._gateway.create_login_link(status.stripe_account_id)  # type: ignore[arg-type]
        return LoginLinkResponse(url=url)

    async def apply_account_update(
        self, db: AsyncSession, remote: ConnectedAccount
    ) -> PayoutAccount | None:
        """Webhook path: refresh local flags from an account.updated payload.

        Runs inside the caller's transaction. Unknown accounts are ignored.
        """
        updated = await self._repo.update_status_by_account_id(
            db, remote.id, remote.is_enabled, remote.details_submitted
        )
        if updated is None:
            logger.info("account.updated for unknown account %s ignored", remote.id)
        return updated

"""PurchaseApplicationService — the purchase ledger.

record_purchase / record_free_access run inside the caller's transaction
(checkout owns commit/rollback). list_library is read-only.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_common.enums import PayoutStatus
from src.lm_common.errors import InternalError
from src.lm_common.pagination import cursor_decode, cursor_encode
from src.lm_purchase.application.schemas import LibraryResponse, PurchaseItem
from src.lm_purchase.domain.models import Purchase
from src.lm_purchase.domain.repository import PurchaseRepositoryProtocol
from src.lm_purchase.infrastructure.persistence import PurchaseRepository

logger = logging.getLogger(__name__)


class PurchaseApplicationService:
    def __init__(self, repo: PurchaseRepositoryProtocol | None = None) -> None:
        self._repo: PurchaseRepositoryProtocol = repo or PurchaseRepository()

    async def record_purchase(self, db: AsyncSession, purchase: Purchase) -> Purchase:
        """Insert purchase; on a repeat of the same payment id return the stored row."""
        if not purchase.is_balanced:
            raise InternalError(
                f"Unbalanced purchase {purchase.stripe_payment_id}: "
                f"{purchase.platform_fee_cents} + {purchase.instructor_payout_cents} "
                f"!= {purchase.amount_cents}"
            )
        inserted = await self._repo.insert_purchase(db, purchase)
        if inserted is not None:
            logger.info(
                "Recorded purchase payment=%s user=%s lesson=%s amount=%d platform=%d instructor=%d",
                inserted.stripe_payment_id, inserted.user_id, inserted.lesson_id,
                inserted.amount_cents, inserted.platform_fee_cents,
                inserted.instructor_payout_cents,
            )
            return inserted

        existing = await self._repo.get_by_payment_id(db, purchase.stripe_payment_id)
        if existing is None:
            raise InternalError(
                f"Purchase insert conflicted but no row for {purchase.stripe_payment_id}"
            )
        logger.info("Purchase idempotency hit: payment=%s", purchase.stripe_payment_id)
        return existing

    async def record_free_access(
        self, db: AsyncSession, user_id: str, lesson_id: str
    ) -> Purchase:
        """Grant a free lesson once per user; repeats return the original grant."""
        existing = await self._repo.get_free_access(db, user_id, lesson_id)
        if existing is not None:
            logger.info("Free access already granted: user=%s lesson=%s", user_id, lesson_id)
            return existing

        grant = Purchase(
            user_id=user_id,
            lesson_id=lesson_id,
            stripe_payment_id=f"free_{uuid.uuid4().hex}",
            base_price_cents=0,
            amount_cents=0,
            platform_fee_cents=0,
            instructor_payout_cents=0,
            payout_status=PayoutStatus.FREE.value,
            is_free=True,
        )
        inserted = await self._repo.insert_purchase(db, grant)
        if inserted is not None:
            return inserted
        # Lost a race with a concurrent grant for the same (user, lesson)
        existing = await self._repo.get_free_access(db, user_id, lesson_id)
        if existing is None:
            raise InternalError(f"Free access insert conflicted for {user_id}/{lesson_id}")
        return existing

    async def has_purchased(self, db: AsyncSession, user_id: str, lesson_id: str) -> bool:
        """True once the user has any paid purchase or free grant for the lesson."""
        return await self._repo.has_access(db, user_id, lesson_id)

    async def list_library(
        self, db: AsyncSession, user_id: str, cursor: str | None, limit: int
    ) -> LibraryResponse:
        cursor_id = cursor_decode(cursor)
        # Fetch limit+1 to detect has_more without a COUNT(*) query
        purchases = await self._repo.list_for_user(db, user_id, cursor_id, limit + 1)
        has_more = len(purchases) > limit
        page = purchases[:limit]
        items = [PurchaseItem.from_domain(p) for p in page]
        next_cursor = cursor_encode(page[-1].id) if has_more and page and page[-1].id else None
        return LibraryResponse(items=items, next_cursor=next_cursor, has_more=has_more)

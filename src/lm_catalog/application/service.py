"""CatalogApplicationService — lesson browse, detail and instructor publishing.

Every price shown to a student is the fee-inclusive charge from the engine;
stored prices are the instructor's base price. Writes are instructor-only:
the caller needs a connected payout account to publish, and must own a lesson
to reprice it.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_catalog.application.schemas import (
    CreateLessonRequest,
    LessonDetail,
    LessonListResponse,
    LessonSummary,
)
from src.lm_catalog.domain.models import Lesson
from src.lm_catalog.domain.repository import LessonRepositoryProtocol
from src.lm_catalog.infrastructure.persistence import LessonRepository
from src.lm_common.cents import validate_amount
from src.lm_common.errors import LessonNotFoundError, LessonNotOwnedError
from src.lm_common.pagination import cursor_decode, cursor_encode
from src.lm_fees.domain.engine import FeeSplit, compute_charge_amount, split_fees
from src.lm_fees.domain.schedule import FeeSchedule
from src.lm_gateway.auth.dependencies import CurrentUser
from src.lm_payouts.application.service import PayoutApplicationService
from src.lm_purchase.application.service import PurchaseApplicationService

logger = logging.getLogger(__name__)


class CatalogApplicationService:
    def __init__(
        self,
        repo: LessonRepositoryProtocol | None = None,
        purchases: PurchaseApplicationService | None = None,
        payouts: PayoutApplicationService | None = None,
        schedule: FeeSchedule | None = None,
    ) -> None:
        self._repo: LessonRepositoryProtocol = repo or LessonRepository()
        self._purchases = purchases or PurchaseApplicationService()
        self._payouts = payouts or PayoutApplicationService()
        self._schedule = schedule

    def _price(self, lesson: Lesson) -> tuple[int, FeeSplit]:
        # Free lessons are never sent to checkout, so no fees apply
        if lesson.is_free:
            return 0, FeeSplit(0, 0)
        charge = compute_charge_amount(lesson.price_cents, self._schedule)
        return charge, split_fees(charge, self._schedule)

    async def _detail(
        self, db: AsyncSession, lesson: Lesson, user_id: str | None
    ) -> LessonDetail:
        charge, split = self._price(lesson)
        purchased = False
        if user_id is not None:
            purchased = await self._purchases.has_purchased(db, user_id, lesson.id)
        return LessonDetail.from_domain(lesson, charge, split, purchased=purchased)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_lesson(
        self, db: AsyncSession, lesson_id: str, user_id: str | None = None
    ) -> LessonDetail:
        """Lesson detail; `purchased` is filled in only when user_id is given."""
        lesson = await self._repo.get_lesson(db, lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return await self._detail(db, lesson, user_id)

    async def list_lessons(
        self, db: AsyncSession, cursor: str | None, limit: int
    ) -> LessonListResponse:
        cursor_id = cursor_decode(cursor)
        lessons = await self._repo.list_lessons(db, cursor_id, limit + 1)
        has_more = len(lessons) > limit
        page = lessons[:limit]
        items = [LessonSummary.from_domain(lesson, self._price(lesson)[0]) for lesson in page]
        next_cursor = cursor_encode(page[-1].id) if has_more and page else None
        return LessonListResponse(items=items, next_cursor=next_cursor, has_more=has_more)

    # ------------------------------------------------------------------
    # Instructor writes
    # ------------------------------------------------------------------

    async def create_lesson(
        self, db: AsyncSession, user: CurrentUser, request: CreateLessonRequest
    ) -> LessonDetail:
        price_cents = validate_amount(request.price_cents)
        # Raises PayoutAccountNotFoundError for callers who are not instructors
        await self._payouts.get_payout_account(db, user.id)

        parent_id = str(request.parent_lesson_id) if request.parent_lesson_id else None
        if parent_id is not None:
            parent = await self._repo.get_lesson(db, parent_id)
            if parent is None:
                raise LessonNotFoundError(parent_id)
            if parent.instructor_id != user.id:
                raise LessonNotOwnedError(parent_id)

        try:
            lesson = await self._repo.insert_lesson(
                db,
                instructor_id=user.id,
                title=request.title,
                price_cents=price_cents,
                description=request.description,
                thumbnail_url=request.thumbnail_url,
                parent_lesson_id=parent_id,
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Lesson %s created by instructor=%s price=%d", lesson.id, user.id, price_cents
        )
        charge, split = self._price(lesson)
        return LessonDetail.from_domain(lesson, charge, split)

    async def update_lesson_price(
        self, db: AsyncSession, user: CurrentUser, lesson_id: str, price_cents: int
    ) -> LessonDetail:
        price_cents = validate_amount(price_cents)
        lesson = await self._repo.get_lesson(db, lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        if lesson.instructor_id != user.id:
            raise LessonNotOwnedError(lesson_id)

        try:
            updated = await self._repo.update_price(db, lesson_id, user.id, price_cents)
            if updated is None:
                raise LessonNotFoundError(lesson_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Lesson %s repriced by instructor=%s: %d -> %d",
            lesson_id, user.id, lesson.price_cents, price_cents,
        )
        charge, split = self._price(updated)
        return LessonDetail.from_domain(updated, charge, split)

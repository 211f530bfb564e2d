"""Pydantic schemas for lm_catalog API."""

from uuid import UUID

from pydantic import BaseModel, Field

from src.lm_catalog.domain.models import Lesson
from src.lm_common.cents import cents_to_display
from src.lm_fees.domain.engine import FeeSplit


class CreateLessonRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    # Base price in cents; 0 publishes a free lesson. Checked by validate_amount.
    price_cents: int
    thumbnail_url: str | None = Field(None, max_length=2048)
    parent_lesson_id: UUID | None = None


class UpdateLessonPriceRequest(BaseModel):
    price_cents: int


class LessonDetail(BaseModel):
    id: str
    title: str
    description: str | None
    instructor_id: str
    thumbnail_url: str | None
    parent_lesson_id: str | None
    is_free: bool
    base_price_cents: int
    base_price_display: str
    # What the student pays (processor fees passed through)
    price_cents: int
    price_display: str
    instructor_payout_cents: int
    instructor_payout_display: str
    # Only ever true for an authenticated caller who owns the lesson
    purchased: bool = False

    @classmethod
    def from_domain(
        cls, lesson: Lesson, charge: int, split: FeeSplit, purchased: bool = False
    ) -> "LessonDetail":
        return cls(
            id=lesson.id,
            title=lesson.title,
            description=lesson.description,
            instructor_id=lesson.instructor_id,
            thumbnail_url=lesson.thumbnail_url,
            parent_lesson_id=lesson.parent_lesson_id,
            is_free=lesson.is_free,
            base_price_cents=lesson.price_cents,
            base_price_display=cents_to_display(lesson.price_cents),
            price_cents=charge,
            price_display=cents_to_display(charge),
            instructor_payout_cents=split.counterparty_share,
            instructor_payout_display=cents_to_display(split.counterparty_share),
            purchased=purchased,
        )


class LessonSummary(BaseModel):
    id: str
    title: str
    instructor_id: str
    thumbnail_url: str | None
    is_free: bool
    price_cents: int
    price_display: str
    created_at: str  # ISO8601 string

    @classmethod
    def from_domain(cls, lesson: Lesson, charge: int) -> "LessonSummary":
        return cls(
            id=lesson.id,
            title=lesson.title,
            instructor_id=lesson.instructor_id,
            thumbnail_url=lesson.thumbnail_url,
            is_free=lesson.is_free,
            price_cents=charge,
            price_display=cents_to_display(charge),
            created_at=lesson.created_at.isoformat() if lesson.created_at else "",
        )


class LessonListResponse(BaseModel):
    items: list[LessonSummary]
    next_cursor: str | None
    has_more: bool

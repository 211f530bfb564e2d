"""Domain models for lm_catalog — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Lesson:
    id: str
    title: str
    instructor_id: str
    price_cents: int                 # instructor base price, before processor fees
    description: str | None = None
    thumbnail_url: str | None = None
    parent_lesson_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_free(self) -> bool:
        return self.price_cents == 0

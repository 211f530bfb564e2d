"""Repository Protocol for lessons — unit tests inject an AsyncMock."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_catalog.domain.models import Lesson


class LessonRepositoryProtocol(Protocol):
    async def get_lesson(self, db: AsyncSession, lesson_id: str) -> Lesson | None: ...

    async def list_lessons(
        self, db: AsyncSession, cursor_id: str | None, limit: int
    ) -> list[Lesson]: ...

    async def insert_lesson(
        self,
        db: AsyncSession,
        instructor_id: str,
        title: str,
        price_cents: int,
        description: str | None = None,
        thumbnail_url: str | None = None,
        parent_lesson_id: str | None = None,
    ) -> Lesson: ...

    async def update_price(
        self, db: AsyncSession, lesson_id: str, instructor_id: str, price_cents: int
    ) -> Lesson | None: ...

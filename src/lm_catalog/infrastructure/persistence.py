"""LessonRepository — raw SQL over the lessons table.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_catalog.domain.models import Lesson

_COLUMNS = """
    id, title, description, instructor_id, price_cents,
    thumbnail_url, parent_lesson_id, created_at, updated_at
"""

_GET_LESSON_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM lessons
    WHERE id = CAST(:lesson_id AS UUID)
""")

# Newest first; same (created_at, id) keyset as the purchase library
_LIST_LESSONS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM lessons
    WHERE CAST(:cursor_id AS UUID) IS NULL
       OR (created_at, id) < (
            SELECT created_at, id FROM lessons WHERE id = CAST(:cursor_id AS UUID)
       )
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_INSERT_LESSON_SQL = text(f"""
    INSERT INTO lessons
        (title, description, instructor_id, price_cents, thumbnail_url, parent_lesson_id)
    VALUES
        (:title, :description, :instructor_id, :price_cents, :thumbnail_url,
         CAST(:parent_lesson_id AS UUID))
    RETURNING {_COLUMNS}
""")

_UPDATE_PRICE_SQL = text(f"""
    UPDATE lessons
    SET price_cents = :price_cents,
        updated_at = NOW()
    WHERE id = CAST(:lesson_id AS UUID)
      AND instructor_id = :instructor_id
    RETURNING {_COLUMNS}
""")


def _row_to_lesson(row: object) -> Lesson:
    parent = row.parent_lesson_id  # type: ignore[attr-defined]
    return Lesson(
        id=str(row.id),  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        instructor_id=str(row.instructor_id),  # type: ignore[attr-defined]
        price_cents=row.price_cents,  # type: ignore[attr-defined]
        thumbnail_url=row.thumbnail_url,  # type: ignore[attr-defined]
        parent_lesson_id=str(parent) if parent else None,
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class LessonRepository:
    async def get_lesson(self, db: AsyncSession, lesson_id: str) -> Lesson | None:
        result = await db.execute(_GET_LESSON_SQL, {"lesson_id": lesson_id})
        row = result.fetchone()
        return _row_to_lesson(row) if row else None

    async def list_lessons(
        self, db: AsyncSession, cursor_id: str | None, limit: int
    ) -> list[Lesson]:
        result = await db.execute(
            _LIST_LESSONS_SQL, {"cursor_id": cursor_id, "limit": limit}
        )
        return [_row_to_lesson(row) for row in result.fetchall()]

    async def insert_lesson(
        self,
        db: AsyncSession,
        instructor_id: str,
        title: str,
        price_cents: int,
        description: str | None = None,
        thumbnail_url: str | None = None,
        parent_lesson_id: str | None = None,
    ) -> Lesson:
        result = await db.execute(
            _INSERT_LESSON_SQL,
            {
                "instructor_id": instructor_id,
                "title": title,
                "price_cents": price_cents,
                "description": description,
                "thumbnail_url": thumbnail_url,
                "parent_lesson_id": parent_lesson_id,
            },
        )
        return _row_to_lesson(result.fetchone())

    async def update_price(
        self, db: AsyncSession, lesson_id: str, instructor_id: str, price_cents: int
    ) -> Lesson | None:
        """Returns None if the lesson is gone or owned by someone else."""
        result = await db.execute(
            _UPDATE_PRICE_SQL,
            {"lesson_id": lesson_id, "instructor_id": instructor_id, "price_cents": price_cents},
        )
        row = result.fetchone()
        return _row_to_lesson(row) if row else None

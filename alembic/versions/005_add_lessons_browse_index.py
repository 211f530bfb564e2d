"""005: index lessons for newest-first browse

Revision ID: 005
Revises: 004
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Matches the keyset in LessonRepository.list_lessons
    op.execute("CREATE INDEX idx_lessons_browse ON lessons (created_at DESC, id DESC);")


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS idx_lessons_browse;")

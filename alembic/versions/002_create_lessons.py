"""002: create lessons table

Revision ID: 002
Revises: 001
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE lessons (
            id                  UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            title               VARCHAR(200)    NOT NULL,
            description         TEXT,
            instructor_id       VARCHAR(64)     NOT NULL,
            price_cents         BIGINT          NOT NULL DEFAULT 0,
            thumbnail_url       TEXT,
            parent_lesson_id    UUID            REFERENCES lessons (id),
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_lessons_price_gte_0 CHECK (price_cents >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_lessons_instructor ON lessons (instructor_id, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_lessons_updated_at
            BEFORE UPDATE ON lessons
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute("COMMENT ON COLUMN lessons.price_cents IS 'Instructor base price, cents, before processor fees';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS lessons CASCADE;")

"""003: create instructor_profiles table

Revision ID: 003
Revises: 002
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE instructor_profiles (
            id                          UUID        PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id                     VARCHAR(64) NOT NULL,
            stripe_account_id           VARCHAR(64),
            stripe_account_enabled      BOOLEAN     NOT NULL DEFAULT FALSE,
            stripe_onboarding_complete  BOOLEAN     NOT NULL DEFAULT FALSE,
            created_at                  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at                  TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_instructor_profiles_user_id UNIQUE (user_id)
        );
    """)
    op.execute("""
        CREATE UNIQUE INDEX uq_instructor_profiles_stripe_account
        ON instructor_profiles (stripe_account_id)
        WHERE stripe_account_id IS NOT NULL;
    """)
    op.execute("""
        CREATE TRIGGER trg_instructor_profiles_updated_at
            BEFORE UPDATE ON instructor_profiles
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS instructor_profiles CASCADE;")

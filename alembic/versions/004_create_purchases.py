"""004: create purchases table

Revision ID: 004
Revises: 003
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE purchases (
            id                          UUID            PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id                     VARCHAR(64)     NOT NULL,
            lesson_id                   UUID            NOT NULL REFERENCES lessons (id),
            stripe_payment_id           VARCHAR(255)    NOT NULL,
            payment_intent_id           VARCHAR(255),
            base_price_cents            BIGINT          NOT NULL,
            amount_cents                BIGINT          NOT NULL,
            platform_fee_cents          BIGINT          NOT NULL,
            instructor_payout_cents     BIGINT          NOT NULL,
            payout_status               VARCHAR(30)     NOT NULL,
            is_free                     BOOLEAN         NOT NULL DEFAULT FALSE,
            created_at                  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_purchases_stripe_payment_id UNIQUE (stripe_payment_id),
            CONSTRAINT ck_purchases_amounts_gte_0 CHECK (
                base_price_cents >= 0 AND amount_cents >= 0
                AND platform_fee_cents >= 0 AND instructor_payout_cents >= 0
            ),
            CONSTRAINT ck_purchases_split_balanced CHECK (
                platform_fee_cents + instructor_payout_cents = amount_cents
            ),
            CONSTRAINT ck_purchases_payout_status CHECK (
                payout_status IN ('FREE', 'TRANSFERRED_ON_CHARGE')
            )
        );
    """)
    op.execute("""
        CREATE UNIQUE INDEX uq_purchases_free_access
        ON purchases (user_id, lesson_id)
        WHERE is_free;
    """)
    op.execute("CREATE INDEX idx_purchases_user_time ON purchases (user_id, created_at DESC, id DESC);")
    op.execute("COMMENT ON TABLE purchases IS 'Purchase ledger — append-only, all amounts in cents';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS purchases CASCADE;")

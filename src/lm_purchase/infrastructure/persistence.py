"""PurchaseRepository — raw SQL over the append-only purchases table.

Idempotency lives in the schema: stripe_payment_id is UNIQUE and free access
is unique per (user_id, lesson_id). insert_purchase uses ON CONFLICT DO
NOTHING and returns None when the row already existed.

Transaction ownership: the CALLER commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_purchase.domain.models import Purchase

_COLUMNS = """
    id, user_id, lesson_id, stripe_payment_id, payment_intent_id,
    base_price_cents, amount_cents, platform_fee_cents, instructor_payout_cents,
    payout_status, is_free, created_at
"""

_INSERT_PURCHASE_SQL = text(f"""
    INSERT INTO purchases
        (user_id, lesson_id, stripe_payment_id, payment_intent_id,
         base_price_cents, amount_cents, platform_fee_cents, instructor_payout_cents,
         payout_status, is_free)
    VALUES
        (:user_id, CAST(:lesson_id AS UUID), :stripe_payment_id, :payment_intent_id,
         :base_price_cents, :amount_cents, :platform_fee_cents, :instructor_payout_cents,
         :payout_status, :is_free)
    ON CONFLICT DO NOTHING
    RETURNING {_COLUMNS}
""")

_GET_BY_PAYMENT_ID_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM purchases
    WHERE stripe_payment_id = :stripe_payment_id
""")

_GET_FREE_ACCESS_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM purchases
    WHERE user_id = :user_id
      AND lesson_id = CAST(:lesson_id AS UUID)
      AND is_free
""")

_HAS_ACCESS_SQL = text("""
    SELECT 1
    FROM purchases
    WHERE user_id = :user_id
      AND lesson_id = CAST(:lesson_id AS UUID)
    LIMIT 1
""")

# Keyset pagination on (created_at, id) — id alone is a random UUID
_LIST_FOR_USER_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM purchases
    WHERE user_id = :user_id
      AND (
        CAST(:cursor_id AS UUID) IS NULL
        OR (created_at, id) < (
            SELECT created_at, id FROM purchases WHERE id = CAST(:cursor_id AS UUID)
        )
      )
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")


def _row_to_purchase(row: object) -> Purchase:
    return Purchase(
        id=str(row.id),  # type: ignore[attr-defined]
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        lesson_id=str(row.lesson_id),  # type: ignore[attr-defined]
        stripe_payment_id=row.stripe_payment_id,  # type: ignore[attr-defined]
        payment_intent_id=row.payment_intent_id,  # type: ignore[attr-defined]
        base_price_cents=row.base_price_cents,  # type: ignore[attr-defined]
        amount_cents=row.amount_cents,  # type: ignore[attr-defined]
        platform_fee_cents=row.platform_fee_cents,  # type: ignore[attr-defined]
        instructor_payout_cents=row.instructor_payout_cents,  # type: ignore[attr-defined]
        payout_status=row.payout_status,  # type: ignore[attr-defined]
        is_free=bool(row.is_free),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


class PurchaseRepository:
    async def insert_purchase(
        self, db: AsyncSession, purchase: Purchase
    ) -> Purchase | None:
        result = await db.execute(
            _INSERT_PURCHASE_SQL,
            {
                "user_id": purchase.user_id,
                "lesson_id": purchase.lesson_id,
                "stripe_payment_id": purchase.stripe_payment_id,
                "payment_intent_id": purchase.payment_intent_id,
                "base_price_cents": purchase.base_price_cents,
                "amount_cents": purchase.amount_cents,
                "platform_fee_cents": purchase.platform_fee_cents,
                "instructor_payout_cents": purchase.instructor_payout_cents,
                "payout_status": purchase.payout_status,
                "is_free": purchase.is_free,
            },
        )
        row = result.fetchone()
        return _row_to_purchase(row) if row else None

    async def get_by_payment_id(
        self, db: AsyncSession, stripe_payment_id: str
    ) -> Purchase | None:
        result = await db.execute(
            _GET_BY_PAYMENT_ID_SQL, {"stripe_payment_id": stripe_payment_id}
        )
        row = result.fetchone()
        return _row_to_purchase(row) if row else None

    async def get_free_access(
        self, db: AsyncSession, user_id: str, lesson_id: str
    ) -> Purchase | None:
        result = await db.execute(
            _GET_FREE_ACCESS_SQL, {"user_id": user_id, "lesson_id": lesson_id}
        )
        row = result.fetchone()
        return _row_to_purchase(row) if row else None

    async def has_access(self, db: AsyncSession, user_id: str, lesson_id: str) -> bool:
        result = await db.execute(
            _HAS_ACCESS_SQL, {"user_id": user_id, "lesson_id": lesson_id}
        )
        return result.fetchone() is not None

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: str | None,
        limit: int,
    ) -> list[Purchase]:
        result = await db.execute(
            _LIST_FOR_USER_SQL,
            {"user_id": user_id, "cursor_id": cursor_id, "limit": limit},
        )
        return [_row_to_purchase(row) for row in result.fetchall()]

"""PayoutAccountRepository — raw SQL over instructor_profiles.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_payouts.domain.models import PayoutAccount

_COLUMNS = """
    user_id, stripe_account_id, stripe_account_enabled,
    stripe_onboarding_complete, created_at, updated_at
"""

_GET_BY_USER_SQL = text(f"""
    SELECT {_COLUMNS}
    FROM instructor_profiles
    WHERE user_id = :user_id
""")

_UPDATE_STATUS_SQL = text(f"""
    UPDATE instructor_profiles
    SET stripe_account_enabled     = :enabled,
        stripe_onboarding_complete = :onboarding_complete,
        updated_at = NOW()
    WHERE user_id = :user_id
    RETURNING {_COLUMNS}
""")

_UPDATE_STATUS_BY_ACCOUNT_SQL = text(f"""
    UPDATE instructor_profiles
    SET stripe_account_enabled     = :enabled,
        stripe_onboarding_complete = :onboarding_complete,
        updated_at = NOW()
    WHERE stripe_account_id = :stripe_account_id
    RETURNING {_COLUMNS}
""")


def _row_to_account(row: object) -> PayoutAccount:
    return PayoutAccount(
        user_id=str(row.user_id),  # type: ignore[attr-defined]
        stripe_account_id=row.stripe_account_id,  # type: ignore[attr-defined]
        enabled=bool(row.stripe_account_enabled),  # type: ignore[attr-defined]
        onboarding_complete=bool(row.stripe_onboarding_complete),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class PayoutAccountRepository:
    async def get_by_user_id(
        self, db: AsyncSession, user_id: str
    ) -> PayoutAccount | None:
        result = await db.execute(_GET_BY_USER_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def update_status(
        self, db: AsyncSession, user_id: str, enabled: bool, onboarding_complete: bool
    ) -> PayoutAccount | None:
        result = await db.execute(
            _UPDATE_STATUS_SQL,
            {"user_id": user_id, "enabled": enabled, "onboarding_complete": onboarding_complete},
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None

    async def update_status_by_account_id(
        self,
        db: AsyncSession,
        stripe_account_id: str,
        enabled: bool,
        onboarding_complete: bool,
    ) -> PayoutAccount | None:
        result = await db.execute(
            _UPDATE_STATUS_BY_ACCOUNT_SQL,
            {
                "stripe_account_id": stripe_account_id,
                "enabled": enabled,
                "onboarding_complete": onboarding_complete,
            },
        )
        row = result.fetchone()
        return _row_to_account(row) if row else None

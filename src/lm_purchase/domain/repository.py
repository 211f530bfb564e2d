"""Repository Protocol for the purchase ledger."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_purchase.domain.models import Purchase


class PurchaseRepositoryProtocol(Protocol):
    async def insert_purchase(
        self, db: AsyncSession, purchase: Purchase
    ) -> Purchase | None: ...

    async def get_by_payment_id(
        self, db: AsyncSession, stripe_payment_id: str
    ) -> Purchase | None: ...

    async def get_free_access(
        self, db: AsyncSession, user_id: str, lesson_id: str
    ) -> Purchase | None: ...

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: str,
        cursor_id: str | None,
        limit: int,
    ) -> list[Purchase]: ...

    async def has_access(self, db: AsyncSession, user_id: str, lesson_id: str) -> bool: ...

"""SQLAlchemy ORM model for instructor_profiles.

Maps to the table created by Alembic migration 003.
DO NOT add/remove columns here without a corresponding migration.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.lm_common.database import Base


class InstructorProfileORM(Base):
    __tablename__ = "instructor_profiles"

    id: Mapped[UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    stripe_account_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    stripe_account_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    stripe_onboarding_complete: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

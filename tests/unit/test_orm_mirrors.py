"""ORM mirrors must cover every column the raw-SQL repositories read."""

import dataclasses

from src.lm_catalog.domain.models import Lesson
from src.lm_catalog.infrastructure.db_models import LessonORM
from src.lm_payouts.infrastructure import persistence as payout_sql
from src.lm_payouts.infrastructure.db_models import InstructorProfileORM
from src.lm_purchase.domain.models import Purchase
from src.lm_purchase.infrastructure import persistence as purchase_sql
from src.lm_purchase.infrastructure.db_models import PurchaseORM


def _columns(select_list: str) -> set[str]:
    return {c.strip() for c in select_list.split(",") if c.strip()}


def test_lesson_mirror() -> None:
    table = set(LessonORM.__table__.columns.keys())
    assert {f.name for f in dataclasses.fields(Lesson)} <= table


def test_instructor_profile_mirror() -> None:
    table = set(InstructorProfileORM.__table__.columns.keys())
    assert _columns(payout_sql._COLUMNS) <= table


def test_purchase_mirror() -> None:
    table = set(PurchaseORM.__table__.columns.keys())
    assert _columns(purchase_sql._COLUMNS) <= table
    assert {f.name for f in dataclasses.fields(Purchase)} <= table
    # Append-only ledger
    assert "updated_at" not in table


def test_purchase_references_lessons() -> None:
    fks = {fk.target_fullname for fk in PurchaseORM.__table__.foreign_keys}
    assert "lessons.id" in fks

"""lm_catalog REST API — public browse/detail, instructor publishing (JWT)."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.lm_catalog.application.schemas import CreateLessonRequest, UpdateLessonPriceRequest
from src.lm_catalog.application.service import CatalogApplicationService
from src.lm_common.database import get_db_session
from src.lm_common.response import ApiResponse, success_response
from src.lm_gateway.auth.dependencies import CurrentUser, get_current_user, get_optional_user

router = APIRouter(prefix="/lessons", tags=["lessons"])

_service = CatalogApplicationService()


@router.get("")
async def list_lessons(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    cursor: str | None = Query(None, description="Pagination cursor (opaque Base64)"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ApiResponse:
    data = await _service.list_lessons(db, cursor, limit)
    return success_response(data.model_dump(), request)


@router.post("", status_code=201)
async def create_lesson(
    body: CreateLessonRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.create_lesson(db, current_user, body)
    return success_response(data.model_dump(), request)


@router.get("/{lesson_id}")
async def get_lesson(
    lesson_id: UUID,
    current_user: Annotated[CurrentUser | None, Depends(get_optional_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    user_id = current_user.id if current_user else None
    data = await _service.get_lesson(db, str(lesson_id), user_id)
    return success_response(data.model_dump(), request)


@router.patch("/{lesson_id}/price")
async def update_lesson_price(
    lesson_id: UUID,
    body: UpdateLessonPriceRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_lesson_price(
        db, current_user, str(lesson_id), body.price_cents
    )
    return success_response(data.model_dump(), request)

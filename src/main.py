"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.lm_catalog.api.router import router as catalog_router
from src.lm_checkout.api.router import router as checkout_router
from src.lm_checkout.api.webhook_router import router as webhook_router
from src.lm_common.database import engine
from src.lm_common.errors import AppError
from src.lm_common.redis_client import close_redis, get_redis
from src.lm_common.response import error_response
from src.lm_fees.api.router import router as fees_router
from src.lm_fees.domain.schedule import get_fee_schedule
from src.lm_gateway.middleware.request_log import RequestLogMiddleware
from src.lm_payouts.api.router import router as payouts_router
from src.lm_purchase.api.router import router as purchase_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: load fee schedule, verify DB + Redis. Shutdown: dispose."""
    # Fail fast on a bad fee configuration
    get_fee_schedule()
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(fees_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(checkout_router, prefix="/api/v1")
app.include_router(webhook_router, prefix="/api/v1")
app.include_router(purchase_router, prefix="/api/v1")
app.include_router(payouts_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}

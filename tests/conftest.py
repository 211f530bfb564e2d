"""Shared test fixtures.

Settings are read at import time, so the environment is primed here before
any test module imports config.settings.
"""

import os

os.environ.setdefault("JWT_SECRET", "unit-test-secret-not-for-production")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_unit")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_unit")

from datetime import UTC, datetime, timedelta  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from jose import jwt  # noqa: E402

from config.settings import settings  # noqa: E402
from src.lm_common.database import get_db_session  # noqa: E402
from src.lm_fees.domain.schedule import FeeSchedule  # noqa: E402
from src.main import app  # noqa: E402


@pytest.fixture
def schedule() -> FeeSchedule:
    """15% platform, 2.9% + 30c processor."""
    return FeeSchedule.from_percent(15, "2.9", 30)


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
async def client(db_session: AsyncMock) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints; DB session is a mock."""

    async def _override_db():
        yield db_session

    app.dependency_overrides[get_db_session] = _override_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _encode_token(user_id: str = "user-1", **claims: object) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "aud": settings.JWT_AUDIENCE,
        "email": "student@example.com",
        "iat": now,
        "exp": now + timedelta(minutes=30),
        **claims,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM))


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {_encode_token()}"}


@pytest.fixture
def make_token():
    """Factory for access tokens signed like the auth provider's."""
    return _encode_token

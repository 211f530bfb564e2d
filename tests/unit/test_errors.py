"""Tests for error codes and the error envelope."""

from src.lm_common.errors import (
    AppError,
    GatewayError,
    InvalidAmountError,
    InvalidCheckoutSessionError,
    InvalidCredentialsError,
    InvalidWebhookSignatureError,
    LessonNotFoundError,
    LessonNotOwnedError,
    PaymentNotCompletedError,
    PayoutAccountNotEnabledError,
    PayoutAccountNotFoundError,
    PriceMismatchError,
)
from src.lm_common.response import error_response, success_response


def test_codes_and_statuses() -> None:
    cases: list[tuple[AppError, int, int]] = [
        (InvalidCredentialsError(), 1001, 401),
        (LessonNotFoundError("abc"), 2001, 404),
        (LessonNotOwnedError("abc"), 2002, 403),
        (PayoutAccountNotFoundError("u1"), 3001, 422),
        (PayoutAccountNotEnabledError("u1"), 3002, 422),
        (PriceMismatchError(1000, 1200), 4001, 409),
        (PaymentNotCompletedError("cs_1", "unpaid"), 4002, 422),
        (InvalidCheckoutSessionError("missing metadata"), 4003, 422),
        (InvalidWebhookSignatureError(), 4004, 400),
        (InvalidAmountError(-1), 6001, 422),
        (GatewayError("timeout"), 9003, 502),
    ]
    for err, code, status in cases:
        assert err.code == code
        assert err.http_status == status


def test_messages_carry_detail() -> None:
    assert "abc" in LessonNotFoundError("abc").message
    assert "1200" in PriceMismatchError(1000, 1200).message
    assert "timeout" in GatewayError("timeout").message


def test_error_response_envelope() -> None:
    resp = error_response(2001, "Lesson not found")
    assert resp.code == 2001
    assert resp.data is None
    assert resp.request_id.startswith("req_")


def test_success_response_without_request() -> None:
    resp = success_response({"x": 1})
    assert resp.code == 0
    assert resp.message == "success"
    assert resp.data == {"x": 1}

"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Catalog
  3xxx: Payout account
  4xxx: Checkout / payment
  6xxx: Pricing
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Invalid or expired access token", 401)


# --- 2xxx: Catalog ---

class LessonNotFoundError(AppError):
    def __init__(self, lesson_id: str) -> None:
        super().__init__(2001, f"Lesson not found: {lesson_id}", 404)


class LessonNotOwnedError(AppError):
    def __init__(self, lesson_id: str) -> None:
        super().__init__(2002, f"Lesson belongs to another instructor: {lesson_id}", 403)


# --- 3xxx: Payout account ---

class PayoutAccountNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(3001, f"Instructor payment account not set up: {user_id}", 422)


class PayoutAccountNotEnabledError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(3002, f"Instructor payment account is not fully enabled: {user_id}", 422)


# --- 4xxx: Checkout / payment ---

class PriceMismatchError(AppError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            4001,
            f"Price mismatch: expected {expected} cents, lesson costs {actual} cents",
            409,
        )


class PaymentNotCompletedError(AppError):
    def __init__(self, session_id: str, payment_status: str) -> None:
        super().__init__(
            4002, f"Payment not completed for session {session_id}: {payment_status}", 422
        )


class InvalidCheckoutSessionError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4003, f"Invalid checkout session: {detail}", 422)


class InvalidWebhookSignatureError(AppError):
    def __init__(self) -> None:
        super().__init__(4004, "Invalid webhook signature", 400)


# --- 6xxx: Pricing ---

class InvalidAmountError(AppError):
    def __init__(self, amount: object) -> None:
        super().__init__(6001, f"Unable to process price: invalid amount {amount!r}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class GatewayError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9003, f"Payment processor error: {detail}", 502)

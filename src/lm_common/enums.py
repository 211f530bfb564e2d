"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class PayoutStatus(str, Enum):
    """Terminal per purchase. Destination charges move the instructor's share
    to their connected account when the charge succeeds; nothing follows."""
    FREE = "FREE"
    TRANSFERRED_ON_CHARGE = "TRANSFERRED_ON_CHARGE"


class CheckoutPaymentStatus(str, Enum):
    """Stripe Checkout Session payment_status values we act on."""
    PAID = "paid"


class WebhookEventType(str, Enum):
    CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
    CHECKOUT_SESSION_ASYNC_PAYMENT_SUCCEEDED = "checkout.session.async_payment_succeeded"
    ACCOUNT_UPDATED = "account.updated"

"""Tests for lm_common.enums — values must match DB CHECK constraints and Stripe strings."""

import re
from pathlib import Path

from src.lm_common.enums import CheckoutPaymentStatus, PayoutStatus, WebhookEventType

_PURCHASES_MIGRATION = (
    Path(__file__).resolve().parents[2] / "alembic" / "versions" / "004_create_purchases.py"
)


class TestPayoutStatus:
    def test_is_str(self) -> None:
        assert isinstance(PayoutStatus.FREE, str)
        assert PayoutStatus.TRANSFERRED_ON_CHARGE == "TRANSFERRED_ON_CHARGE"

    def test_members_are_terminal_states_only(self) -> None:
        assert {s.value for s in PayoutStatus} == {"FREE", "TRANSFERRED_ON_CHARGE"}

    def test_matches_check_constraint(self) -> None:
        source = _PURCHASES_MIGRATION.read_text()
        match = re.search(r"payout_status IN \(([^)]*)\)", source)
        assert match is not None
        allowed = set(re.findall(r"'([A-Z_]+)'", match.group(1)))
        assert allowed == {s.value for s in PayoutStatus}


class TestCheckoutPaymentStatus:
    def test_only_paid(self) -> None:
        assert [s.value for s in CheckoutPaymentStatus] == ["paid"]


class TestWebhookEventType:
    def test_stripe_event_names(self) -> None:
        assert {e.value for e in WebhookEventType} == {
            "checkout.session.completed",
            "checkout.session.async_payment_succeeded",
            "account.updated",
        }

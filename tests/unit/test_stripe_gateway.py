"""Unit tests for StripeGateway with the stripe SDK patched out."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
import stripe

from src.lm_common.errors import GatewayError, InvalidWebhookSignatureError
from src.lm_processor.domain.gateway import CheckoutSessionRequest
from src.lm_processor.infrastructure.stripe_gateway import StripeGateway


def _stripe_session(**overrides) -> SimpleNamespace:
    fields = {
        "id": "cs_test_1",
        "payment_status": "paid",
        "amount_total": 1061,
        "url": "https://checkout.stripe.com/c/pay/cs_test_1",
        "payment_intent": "pi_1",
        "metadata": {"lesson_id": "lesson-1", "user_id": "student-1"},
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _stripe_account(**overrides) -> SimpleNamespace:
    fields = {
        "id": "acct_123",
        "charges_enabled": True,
        "payouts_enabled": True,
        "details_submitted": True,
        "email": "instructor@example.com",
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def gateway() -> StripeGateway:
    return StripeGateway(api_key="sk_test_x", webhook_secret="whsec_x")


def _request() -> CheckoutSessionRequest:
    return CheckoutSessionRequest(
        product_name="Intro to Watercolor",
        product_description="Intro to Watercolor (includes processing fees)",
        line_item_amount=1061,
        destination_account_id="acct_123",
        application_fee_amount=159,
        success_url="http://app/checkout/lesson-success?session_id={CHECKOUT_SESSION_ID}",
        cancel_url="http://app/lessons/lesson-1",
        customer_email="student@example.com",
        metadata={"lesson_id": "lesson-1", "user_id": "student-1"},
    )


class TestCreateCheckoutSession:
    async def test_destination_charge_params(self, gateway: StripeGateway) -> None:
        with patch.object(
            stripe.checkout.Session, "create", MagicMock(return_value=_stripe_session())
        ) as create:
            session = await gateway.create_checkout_session(_request())

        assert session.id == "cs_test_1"
        assert session.payment_intent_id == "pi_1"
        kwargs = create.call_args.kwargs
        assert kwargs["api_key"] == "sk_test_x"
        assert kwargs["mode"] == "payment"
        line_item = kwargs["line_items"][0]
        assert line_item["price_data"]["unit_amount"] == 1061
        assert line_item["price_data"]["currency"] == "usd"
        assert line_item["quantity"] == 1
        intent = kwargs["payment_intent_data"]
        assert intent["application_fee_amount"] == 159
        assert intent["transfer_data"] == {"destination": "acct_123"}
        assert kwargs["customer_email"] == "student@example.com"
        assert kwargs["metadata"]["lesson_id"] == "lesson-1"

    async def test_stripe_error_becomes_gateway_error(self, gateway: StripeGateway) -> None:
        with patch.object(
            stripe.checkout.Session, "create", MagicMock(side_effect=stripe.StripeError("nope"))
        ):
            with pytest.raises(GatewayError) as exc_info:
                await gateway.create_checkout_session(_request())
        assert exc_info.value.http_status == 502


class TestRetrieve:
    async def test_retrieve_session_with_expanded_intent(self, gateway: StripeGateway) -> None:
        expanded = _stripe_session(payment_intent=SimpleNamespace(id="pi_expanded"))
        with patch.object(stripe.checkout.Session, "retrieve", MagicMock(return_value=expanded)):
            session = await gateway.retrieve_checkout_session("cs_test_1")
        assert session.payment_intent_id == "pi_expanded"
        assert session.metadata == {"lesson_id": "lesson-1", "user_id": "student-1"}

    async def test_retrieve_account(self, gateway: StripeGateway) -> None:
        with patch.object(
            stripe.Account, "retrieve", MagicMock(return_value=_stripe_account(payouts_enabled=False))
        ) as retrieve:
            account = await gateway.retrieve_account("acct_123")
        assert account.charges_enabled is True
        assert account.is_enabled is False
        assert retrieve.call_args.args == ("acct_123",)

    async def test_login_link(self, gateway: StripeGateway) -> None:
        link = SimpleNamespace(url="https://connect.stripe.com/express/abc")
        with patch.object(stripe.Account, "create_login_link", MagicMock(return_value=link)):
            assert await gateway.create_login_link("acct_123") == link.url


class TestConstructEvent:
    def _event(self, event_type: str, obj: SimpleNamespace) -> SimpleNamespace:
        return SimpleNamespace(id="evt_1", type=event_type, data=SimpleNamespace(object=obj))

    def test_checkout_completed(self, gateway: StripeGateway) -> None:
        event = self._event("checkout.session.completed", _stripe_session())
        with patch.object(stripe.Webhook, "construct_event", MagicMock(return_value=event)) as ce:
            parsed = gateway.construct_event(b"{}", "t=1,v1=sig")
        assert ce.call_args.args == (b"{}", "t=1,v1=sig", "whsec_x")
        assert parsed.checkout_session is not None
        assert parsed.checkout_session.amount_total == 1061
        assert parsed.account is None

    def test_async_payment_succeeded_carries_session(self, gateway: StripeGateway) -> None:
        event = self._event("checkout.session.async_payment_succeeded", _stripe_session())
        with patch.object(stripe.Webhook, "construct_event", MagicMock(return_value=event)):
            parsed = gateway.construct_event(b"{}", "t=1,v1=sig")
        assert parsed.checkout_session is not None
        assert parsed.checkout_session.payment_status == "paid"
        assert parsed.checkout_session.amount_total == 1061

    def test_account_updated(self, gateway: StripeGateway) -> None:
        event = self._event("account.updated", _stripe_account())
        with patch.object(stripe.Webhook, "construct_event", MagicMock(return_value=event)):
            parsed = gateway.construct_event(b"{}", "t=1,v1=sig")
        assert parsed.account is not None
        assert parsed.account.is_enabled is True

    def test_other_event(self, gateway: StripeGateway) -> None:
        event = self._event("charge.refunded", SimpleNamespace(id="ch_1"))
        with patch.object(stripe.Webhook, "construct_event", MagicMock(return_value=event)):
            parsed = gateway.construct_event(b"{}", "t=1,v1=sig")
        assert parsed.type == "charge.refunded"
        assert parsed.checkout_session is None and parsed.account is None

    def test_bad_signature(self, gateway: StripeGateway) -> None:
        err = stripe.SignatureVerificationError("No signatures found", "bad")
        with patch.object(stripe.Webhook, "construct_event", MagicMock(side_effect=err)):
            with pytest.raises(InvalidWebhookSignatureError):
                gateway.construct_event(b"{}", "bad")

    def test_bad_payload(self, gateway: StripeGateway) -> None:
        with patch.object(
            stripe.Webhook, "construct_event", MagicMock(side_effect=ValueError("bad json"))
        ):
            with pytest.raises(InvalidWebhookSignatureError):
                gateway.construct_event(b"not json", "t=1,v1=sig")

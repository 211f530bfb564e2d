"""Payment processor port.

Value objects are plain dataclasses so services and tests never touch the
Stripe SDK types. The adapter in infrastructure/stripe_gateway.py maps
between the two.
"""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class CheckoutSessionRequest:
    product_name: str
    line_item_amount: int            # cents, fee-inclusive charge
    destination_account_id: str      # instructor's connected account
    application_fee_amount: int      # cents, platform share of the charge
    success_url: str
    cancel_url: str
    currency: str = "usd"
    product_description: str | None = None
    customer_email: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    payment_status: str
    amount_total: int | None
    url: str | None = None
    payment_intent_id: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ConnectedAccount:
    id: str
    charges_enabled: bool
    payouts_enabled: bool
    details_submitted: bool
    email: str | None = None

    @property
    def is_enabled(self) -> bool:
        return self.charges_enabled and self.payouts_enabled


@dataclass(frozen=True)
class WebhookEvent:
    id: str
    type: str
    # Parsed payload for the event types we handle, None otherwise
    checkout_session: CheckoutSession | None = None
    account: ConnectedAccount | None = None


class PaymentGatewayProtocol(Protocol):
    async def create_checkout_session(
        self, request: CheckoutSessionRequest
    ) -> CheckoutSession: ...

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession: ...

    async def retrieve_account(self, account_id: str) -> ConnectedAccount: ...

    async def create_login_link(self, account_id: str) -> str: ...

    def construct_event(self, payload: bytes, signature: str) -> WebhookEvent: ...

"""Configurable fake payment gateway for development and testing.

Simulates hosted checkout without any external calls. Webhooks carry the
same ``t=<timestamp>,v1=<signature>`` header Stripe sends and are checked by
the stripe library's verifier, so the verification path is exercised for
real; ``sign_payload`` produces valid headers for tests and manual runs.
"""

import time
from uuid import uuid4

import stripe

from storefront.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    GatewayError,
    GatewayEvent,
    PaymentGateway,
)
from storefront.gateway.stripe_adapter import verify_event

DEFAULT_TOLERANCE = 300  # seconds


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, webhook_secret: str = "whsec_fake", tolerance: int = DEFAULT_TOLERANCE) -> None:
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment provider unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment provider unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        customer_email: str,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
        client_reference_id: str | None = None,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "line_items": line_items,
                "customer_email": customer_email,
                "metadata": metadata,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "client_reference_id": client_reference_id,
            }
        )

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

        session_id = f"cs_test_{uuid4().hex[:24]}"
        return CheckoutSession(id=session_id, url=f"https://checkout.fake.local/pay/{session_id}")

    # -------------------------------------------------------------------
    # Webhooks
    # -------------------------------------------------------------------
    def sign_payload(self, payload: bytes | str, timestamp: int | None = None) -> str:
        """Build a signature header for ``payload``."""
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        timestamp = int(time.time()) if timestamp is None else timestamp
        digest = stripe.WebhookSignature._compute_signature(f"{timestamp}.{payload}", self.webhook_secret)
        return f"t={timestamp},{stripe.WebhookSignature.EXPECTED_SCHEME}={digest}"

    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        self.calls.append({"method": "construct_event", "signature": signature})
        return verify_event(payload, signature, self.webhook_secret, self.tolerance)

"""Stripe payment gateway adapter.

Uses Stripe Checkout (hosted payment page) in ``payment`` mode and verifies
webhooks with the endpoint's signing secret.
"""

import json

import stripe
import structlog

from storefront.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    GatewayError,
    GatewayEvent,
    PaymentGateway,
    SignatureVerificationError,
)

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production gateway backed by the stripe-python SDK."""

    def __init__(self, api_key: str, webhook_secret: str | None, tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE):
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.tolerance = tolerance

    def create_checkout_session(
        self,
        line_items: list[CheckoutLineItem],
        customer_email: str,
        metadata: dict[str, str],
        success_url: str,
        cancel_url: str,
        client_reference_id: str | None = None,
    ) -> CheckoutSession:
        params = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [self._line_item(item) for item in line_items],
            "customer_email": customer_email,
            "metadata": metadata,
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if client_reference_id:
            params["client_reference_id"] = client_reference_id

        try:
            session = stripe.checkout.Session.create(api_key=self.api_key, **params)
        except stripe.StripeError as exc:
            logger.error(
                "Stripe rejected checkout session",
                error=str(exc),
                http_status=getattr(exc, "http_status", None),
                request_id=getattr(exc, "request_id", None),
            )
            raise GatewayError(exc.user_message or "Payment provider error") from exc

        return CheckoutSession(id=session.id, url=session.url)

    def construct_event(self, payload: bytes, signature: str) -> GatewayEvent:
        if not self.webhook_secret:
            raise SignatureVerificationError("Webhook signing secret is not configured")
        return verify_event(payload, signature, self.webhook_secret, self.tolerance)

    @staticmethod
    def _line_item(item: CheckoutLineItem) -> dict:
        product_data = {"name": item.name}
        if item.image_url:
            product_data["images"] = [item.image_url]
        return {
            "price_data": {
                "currency": item.currency,
                "product_data": product_data,
                "unit_amount": item.unit_amount,
            },
            "quantity": item.quantity,
        }


def verify_event(payload: bytes | str, signature: str, secret: str, tolerance: int | None) -> GatewayEvent:
    """Check a ``Stripe-Signature`` header against ``payload`` and parse the event.

    Raises:
        SignatureVerificationError: if the header is malformed, no signature
            matches, the timestamp is outside ``tolerance`` or the payload is
            not JSON.
    """
    text = payload.decode("utf-8") if isinstance(payload, bytes) else payload
    try:
        stripe.WebhookSignature.verify_header(text, signature, secret, tolerance)
    except stripe.SignatureVerificationError as exc:
        raise SignatureVerificationError(str(exc)) from exc

    try:
        body = json.loads(text)
    except json.JSONDecodeError:
        raise SignatureVerificationError("Payload is not valid JSON") from None

    return GatewayEvent(
        id=body.get("id", ""),
        type=body.get("type", ""),
        data=(body.get("data") or {}).get("object") or {},
    )

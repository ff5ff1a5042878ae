"""Checkout orchestration: from a customer's cart to a hosted payment page.

Flow:
    1. Merge the cart lines so each product appears once
    2. Convert each line to a provider line item (minor units, display name, image)
    3. Encode the order intent into checkout-session metadata
    4. Ask the payment gateway for a hosted checkout session

No order is recorded and the cart is left untouched; the order only comes
into existence when the provider confirms payment (see
``storefront.checkout.confirmation``).
"""

from decimal import Decimal
from urllib.parse import urlparse

import structlog

from storefront.checkout.intent import IntentLine, OrderIntent, encode_metadata
from storefront.gateway import get_gateway
from storefront.gateway.port import CheckoutLineItem, CheckoutSession, PaymentGateway
from storefront.shared.money import to_minor_units
from storefront.utils.settings import Settings, get_settings

logger = structlog.get_logger(__name__)


def group_lines(items: list[IntentLine]) -> list[IntentLine]:
    """Merge lines that share a product id and unit price, summing their quantities.

    The first occurrence keeps its position and names. Lines for the same
    product at different prices stay separate so the grouped lines still add
    up to the intent's total.
    """
    merged: dict[tuple[str, Decimal], IntentLine] = {}
    for item in items:
        key = (item.product_id, item.price)
        existing = merged.get(key)
        if existing is None:
            merged[key] = item.model_copy()
        else:
            merged[key] = existing.model_copy(update={"quantity": existing.quantity + item.quantity})
    return list(merged.values())


def forwardable_image(url: str | None) -> str | None:
    """Only absolute http(s) URLs can be shown on the hosted page."""
    if not url:
        return None
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return url
    return None


def build_line_items(items: list[IntentLine], currency: str) -> list[CheckoutLineItem]:
    return [
        CheckoutLineItem(
            name=item.name_en or item.name_fr,
            unit_amount=to_minor_units(item.price),
            quantity=item.quantity,
            currency=currency,
            image_url=forwardable_image(item.image_url),
        )
        for item in items
    ]


def start_checkout(
    intent: OrderIntent,
    gateway: PaymentGateway | None = None,
    settings: Settings | None = None,
) -> CheckoutSession:
    """Create a hosted checkout session for ``intent``.

    Raises:
        IntentTooLarge: if the order cannot be carried in session metadata.
        GatewayError: if the payment provider fails or is unreachable.
    """
    gateway = gateway or get_gateway()
    settings = settings or get_settings()

    intent = intent.model_copy(update={"items": group_lines(intent.items)})
    line_items = build_line_items(intent.items, settings.currency)
    metadata = encode_metadata(intent)

    session = gateway.create_checkout_session(
        line_items=line_items,
        customer_email=intent.customer_email,
        metadata=metadata,
        success_url=settings.success_url,
        cancel_url=settings.cancel_url,
        client_reference_id=intent.cart_session_id,
    )

    logger.info(
        "Checkout session created",
        checkout_session_id=session.id,
        line_count=len(line_items),
        total=str(intent.total),
        currency=settings.currency,
    )
    return session

"""Payment confirmation: turns a completed checkout session into an Order.

The payment provider notifies us through a signed webhook. Only
``checkout.session.completed`` events create orders; the provider's checkout
session id is the idempotency key, so a redelivered event returns the order
already on record instead of creating a second one.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.cart.items import remove_session_lines
from storefront.checkout.intent import OrderIntent, decode_metadata
from storefront.domain import storefront
from storefront.gateway.port import GatewayEvent
from storefront.order.order import Order

logger = structlog.get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


@storefront.command(part_of="Order")
class ConfirmCheckout:
    checkout_session_id = String(required=True, max_length=255)
    event_id = String(max_length=255)
    intent = Text(required=True)  # OrderIntent as JSON


@storefront.command_handler(part_of=Order)
class ConfirmCheckoutHandler:
    @handle(ConfirmCheckout)
    def confirm_checkout(self, command):
        repo = current_domain.repository_for(Order)

        existing = repo.find_by_checkout_session(command.checkout_session_id)
        if existing is not None:
            logger.info(
                "Checkout already confirmed",
                checkout_session_id=command.checkout_session_id,
                order_id=str(existing.id),
                event_id=command.event_id,
            )
            return str(existing.id)

        intent = OrderIntent.model_validate_json(command.intent)
        order = Order.place(
            checkout_session_id=command.checkout_session_id,
            customer_name=intent.customer_name,
            customer_email=intent.customer_email,
            customer_phone=intent.customer_phone,
            shipping_address=intent.shipping(),
            total=intent.total,
            lines=intent.order_lines(),
        )
        repo.add(order)

        # Stock is not decremented on purchase; record what sold so it can
        # be reconciled by hand.
        for line in intent.items:
            logger.info(
                "Stock reconciliation required",
                order_id=str(order.id),
                product_id=line.product_id,
                quantity=line.quantity,
            )

        if intent.cart_session_id:
            removed = remove_session_lines(intent.cart_session_id)
            logger.debug("Cleared purchased cart", session_id=intent.cart_session_id, removed=removed)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            checkout_session_id=command.checkout_session_id,
            total=order.total,
            line_count=len(intent.items),
        )
        return str(order.id)


def process_gateway_event(event: GatewayEvent) -> str | None:
    """Act on a verified webhook event.

    Returns the id of the order recorded for the event, or None when the event
    was acknowledged without recording anything.
    """
    if event.type != CHECKOUT_COMPLETED:
        logger.debug("Ignoring gateway event", event_id=event.id, event_type=event.type)
        return None

    checkout_session_id = event.data.get("id")
    intent = decode_metadata(event.data.get("metadata"))
    if not checkout_session_id or intent is None:
        logger.warning(
            "Completed checkout carries no usable order data",
            event_id=event.id,
            checkout_session_id=checkout_session_id,
        )
        return None

    command = ConfirmCheckout(
        checkout_session_id=checkout_session_id,
        event_id=event.id,
        intent=intent.model_dump_json(),
    )
    try:
        return current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        logger.error(
            "Completed checkout could not be recorded",
            event_id=event.id,
            checkout_session_id=checkout_session_id,
            errors=exc.messages,
        )
        return None

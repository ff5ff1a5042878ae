"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A paid checkout session was recorded as an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    checkout_session_id = String(required=True)
    customer_email = String(required=True)
    total = String(required=True)
    item_count = Integer(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to another fulfillment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)

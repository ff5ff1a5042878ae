"""Order aggregate: a confirmed purchase and its fulfillment status.

An Order is created exactly once, when the payment provider reports a
completed checkout session. Its lines are a snapshot of what was bought
(names, unit price, image) taken from the checkout intent, stored one row per
line, and never changed afterwards. Only the status moves, and any status may
overwrite any other.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.shared.money import InvalidAmount, format_amount, sum_lines, to_decimal


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as entered at checkout."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.entity(part_of="Order")
class OrderLine:
    """One purchased product, frozen at checkout time."""

    product_id = Identifier(required=True)
    name_en = String(required=True, max_length=255)
    name_fr = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price = String(required=True, max_length=20)  # Unit price, two-place decimal
    image_url = String(max_length=500)

    @property
    def subtotal(self) -> Decimal:
        return to_decimal(self.price) * self.quantity


@storefront.aggregate
class Order:
    checkout_session_id = String(required=True, max_length=255, unique=True)
    customer_name = String(required=True, max_length=255)
    customer_email = String(required=True, max_length=255)
    customer_phone = String(max_length=50)
    shipping_address = ValueObject(ShippingAddress)
    total = String(required=True, max_length=20)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderLine)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_line_items(self):
        if not self.items:
            return
        expected = sum_lines((line.price, line.quantity) for line in self.items)
        if to_decimal(self.total) != expected:
            raise ValidationError({"total": [f"Order total {self.total} does not match line items ({expected})"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        checkout_session_id,
        customer_name,
        customer_email,
        shipping_address,
        total,
        lines,
        customer_phone=None,
    ):
        """Record a confirmed checkout.

        Args:
            checkout_session_id: The provider's session identifier; one order per session.
            shipping_address: Dict with street, city, postal_code, country.
            total: Decimal or two-place string; must equal the sum of the lines.
            lines: List of dicts with product_id, name_en, name_fr, quantity,
                   price, image_url.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one line"]})
        try:
            total = format_amount(total)
            lines = [{**line, "price": format_amount(line["price"])} for line in lines]
        except InvalidAmount as exc:
            raise ValidationError({"total": [str(exc)]}) from None

        now = datetime.now(UTC)
        order = cls(
            checkout_session_id=checkout_session_id,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            shipping_address=ShippingAddress(**shipping_address),
            total=total,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        with atomic_change(order):
            for line in lines:
                order.add_items(
                    OrderLine(
                        product_id=line["product_id"],
                        name_en=line["name_en"],
                        name_fr=line["name_fr"],
                        quantity=line["quantity"],
                        price=line["price"],
                        image_url=line.get("image_url"),
                    )
                )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                checkout_session_id=checkout_session_id,
                customer_email=customer_email,
                total=total,
                item_count=len(lines),
                items=json.dumps([{"product_id": str(li["product_id"]), "quantity": li["quantity"]} for li in lines]),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    def update_status(self, new_status):
        """Overwrite the status. No transition rules apply."""
        try:
            status = OrderStatus(new_status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Unknown status '{new_status}', expected one of: {allowed}"]}) from None

        previous_status = self.status
        self.status = status.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=status.value,
                changed_at=now,
            )
        )

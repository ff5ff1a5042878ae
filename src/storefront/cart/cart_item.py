"""CartItem aggregate: one line of an anonymous session's cart.

A session token is generated by the browser and sent with every cart request;
it is a capability, not an identity, and nothing here authenticates it.

The line identifier is derived from (session_id, product_id), so a session can
never hold two lines for the same product: a second insert for the pair hits
the same primary key, and repeated adds increment the existing line.
"""

from datetime import UTC, datetime
from uuid import NAMESPACE_URL, uuid5

from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from storefront.cart.events import CartItemAdded, CartQuantityUpdated
from storefront.domain import storefront

_LINE_NAMESPACE = uuid5(NAMESPACE_URL, "urn:argile:cart-line")


def cart_line_id(session_id: str, product_id: str) -> str:
    """Deterministic identifier of the cart line for a session/product pair."""
    return str(uuid5(_LINE_NAMESPACE, f"{session_id}\x1f{product_id}"))


@storefront.aggregate
class CartItem:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, session_id, product_id, quantity=1):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        now = datetime.now(UTC)
        item = cls(
            id=cart_line_id(session_id, str(product_id)),
            session_id=session_id,
            product_id=product_id,
            quantity=quantity,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            CartItemAdded(
                item_id=str(item.id),
                session_id=session_id,
                product_id=str(product_id),
                quantity_added=quantity,
                quantity=quantity,
            )
        )
        return item

    def increase(self, quantity):
        """Add more of the same product to this line."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        self.quantity += quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemAdded(
                item_id=str(self.id),
                session_id=self.session_id,
                product_id=str(self.product_id),
                quantity_added=quantity,
                quantity=self.quantity,
            )
        )

    def change_quantity(self, new_quantity):
        if new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a positive integer"]})

        previous_quantity = self.quantity
        self.quantity = new_quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                item_id=str(self.id),
                session_id=self.session_id,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

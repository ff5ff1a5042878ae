"""Domain events for the CartItem aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="CartItem")
class CartItemAdded:
    """A product was put in a session's cart (new line or extra quantity)."""

    __version__ = 1

    item_id = Identifier(required=True)
    session_id = String(required=True)
    product_id = Identifier(required=True)
    quantity_added = Integer(required=True)
    quantity = Integer(required=True)


@storefront.event(part_of="CartItem")
class CartQuantityUpdated:
    """The quantity of a cart line was overwritten."""

    __version__ = 1

    item_id = Identifier(required=True)
    session_id = String(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)

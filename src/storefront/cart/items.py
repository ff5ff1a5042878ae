"""Cart item management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain
from sqlalchemy.exc import IntegrityError

from storefront.cart.cart_item import CartItem, cart_line_id
from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="CartItem")
class AddToCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="CartItem")
class UpdateCartQuantity:
    """Overwrite a line's quantity. Zero or less removes the line."""

    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="CartItem")
class RemoveFromCart:
    item_id = Identifier(required=True)


@storefront.command(part_of="CartItem")
class ClearCart:
    session_id = String(required=True, max_length=255)


def remove_session_lines(session_id: str) -> int:
    """Delete every cart line of a session. Returns how many were removed."""
    repo = current_domain.repository_for(CartItem)
    lines = repo.for_session(session_id)
    for line in lines:
        repo._dao.delete(line)
    return len(lines)


def add_item(command: AddToCart) -> str:
    """Insert a cart line or increment the existing one; returns the line id.

    Two first adds of the same product to a session race to insert the same
    line id. The losing request retries once, finds the line and increments it.
    """
    try:
        return current_domain.process(command, asynchronous=False)
    except (IntegrityError, ExpectedVersionError) as exc:
        logger.info(
            "Cart line written concurrently, retrying",
            session_id=command.session_id,
            product_id=str(command.product_id),
            error=str(exc),
        )
        return current_domain.process(command, asynchronous=False)


@storefront.command_handler(part_of=CartItem)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.in_stock:
            raise ValidationError({"product_id": ["Product is out of stock"]})

        repo = current_domain.repository_for(CartItem)
        try:
            item = repo.get(cart_line_id(command.session_id, str(command.product_id)))
            item.increase(command.quantity)
        except ObjectNotFoundError:
            item = CartItem.create(
                session_id=command.session_id,
                product_id=command.product_id,
                quantity=command.quantity,
            )
        repo.add(item)
        return str(item.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        if command.quantity < 1:
            self._remove(command.item_id)
            return

        repo = current_domain.repository_for(CartItem)
        item = repo.get(command.item_id)
        item.change_quantity(command.quantity)
        repo.add(item)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        self._remove(command.item_id)

    @handle(ClearCart)
    def clear_cart(self, command):
        removed = remove_session_lines(command.session_id)
        logger.info("Cart cleared", session_id=command.session_id, removed=removed)
        return removed

    @staticmethod
    def _remove(item_id):
        repo = current_domain.repository_for(CartItem)
        try:
            item = repo.get(item_id)
        except ObjectNotFoundError:
            logger.debug("Cart line already gone", item_id=str(item_id))
            return
        repo._dao.delete(item)

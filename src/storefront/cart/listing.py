"""Cart listing: a session's lines joined to current catalogue data."""

from dataclasses import dataclass
from decimal import Decimal

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart_item import CartItem
from storefront.catalogue.product import Product
from storefront.shared.money import sum_lines

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    item: CartItem
    product: Product

    @property
    def subtotal(self) -> Decimal:
        return self.product.unit_price * self.item.quantity


def list_cart(session_id: str) -> list[CartLine]:
    """Lines of a session's cart with their products.

    Lines whose product has been deleted from the catalogue are dropped.
    """
    products = current_domain.repository_for(Product)
    lines = []
    for item in current_domain.repository_for(CartItem).for_session(session_id):
        try:
            product = products.get(item.product_id)
        except ObjectNotFoundError:
            logger.debug("Dropping cart line for missing product", item_id=str(item.id), product_id=str(item.product_id))
            continue
        lines.append(CartLine(item=item, product=product))
    return lines


def cart_subtotal(lines: list[CartLine]) -> Decimal:
    return sum_lines((line.product.price, line.item.quantity) for line in lines)

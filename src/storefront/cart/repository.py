"""Cart queries."""

from storefront.cart.cart_item import CartItem
from storefront.domain import storefront
from storefront.shared.queries import every


@storefront.repository(part_of=CartItem)
class CartItemRepository:
    def for_session(self, session_id: str) -> list[CartItem]:
        """All lines of a session's cart, oldest first."""
        return every(self._dao.query.filter(session_id=session_id).order_by("created_at"))

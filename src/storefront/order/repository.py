"""Order queries."""

from storefront.domain import storefront
from storefront.order.order import Order
from storefront.shared.queries import every


@storefront.repository(part_of=Order)
class OrderRepository:
    def newest_first(self, offset: int = 0, limit: int | None = None) -> list[Order]:
        """Orders newest first; every order from ``offset`` on unless ``limit`` is given."""
        query = self._dao.query.order_by("-created_at")
        if limit is None:
            return every(query, offset=offset)
        return query.offset(offset).limit(limit).all().items

    def find_by_checkout_session(self, checkout_session_id: str) -> Order | None:
        """The order recorded for a provider checkout session, if any."""
        return self._dao.query.filter(checkout_session_id=checkout_session_id).all().first

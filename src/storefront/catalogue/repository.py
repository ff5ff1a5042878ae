"""Catalogue queries."""

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.queries import every


@storefront.repository(part_of=Product)
class ProductRepository:
    def listing(self, category: str | None = None, featured: bool | None = None) -> list[Product]:
        """Products newest first, optionally narrowed to a category or the featured shelf."""
        criteria = {}
        if category:
            criteria["category"] = category
        if featured is not None:
            criteria["featured"] = featured

        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)
        return every(query.order_by("-created_at"))

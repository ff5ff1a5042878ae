"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name_en = String(required=True)
    price = String(required=True)
    category = String(required=True)
    added_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """Catalogue details of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    name_en = String(required=True)
    price = String(required=True)
    in_stock = Boolean(required=True)
    featured = Boolean(required=True)

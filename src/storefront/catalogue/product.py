"""Product aggregate: a piece in the bilingual pottery catalogue.

Orders never point at live products: they copy names, price and image into
their own lines at confirmation time, so a product can be edited or deleted
without rewriting order history.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, List, String, Text

from storefront.catalogue.events import ProductAdded, ProductUpdated
from storefront.domain import storefront
from storefront.shared.money import InvalidAmount, format_amount, to_decimal

# Fields an admin may change after creation
EDITABLE_FIELDS = (
    "name_en",
    "name_fr",
    "description_en",
    "description_fr",
    "price",
    "category",
    "image_url",
    "image_urls",
    "in_stock",
    "featured",
    "dimensions",
    "materials",
    "care_instructions",
)


def _normalized_price(price):
    try:
        return format_amount(price)
    except InvalidAmount as exc:
        raise ValidationError({"price": [str(exc)]}) from None


@storefront.aggregate
class Product:
    name_en = String(required=True, max_length=255)
    name_fr = String(required=True, max_length=255)
    description_en = Text(required=True)
    description_fr = Text(required=True)
    price = String(required=True, max_length=20)  # Two-place decimal, e.g. "45.00"
    category = String(required=True, max_length=100)
    image_url = String(required=True, max_length=500)
    image_urls = List(content_type=String)
    in_stock = Boolean(default=True)
    featured = Boolean(default=False)
    dimensions = String(max_length=255)
    materials = String(max_length=255)
    care_instructions = String(max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def price_must_be_a_valid_amount(self):
        if self.price is None:
            return
        try:
            to_decimal(self.price)
        except InvalidAmount as exc:
            raise ValidationError({"price": [str(exc)]}) from None

    @property
    def unit_price(self):
        return to_decimal(self.price)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name_en,
        name_fr,
        description_en,
        description_fr,
        price,
        category,
        image_url,
        image_urls=None,
        in_stock=True,
        featured=False,
        dimensions=None,
        materials=None,
        care_instructions=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            name_en=name_en,
            name_fr=name_fr,
            description_en=description_en,
            description_fr=description_fr,
            price=_normalized_price(price),
            category=category,
            image_url=image_url,
            image_urls=list(image_urls) if image_urls else [image_url],
            in_stock=True if in_stock is None else in_stock,
            featured=bool(featured),
            dimensions=dimensions,
            materials=materials,
            care_instructions=care_instructions,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name_en=product.name_en,
                price=product.price,
                category=product.category,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Behaviour
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply a partial update. Keys mapped to None are left untouched."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be edited"] for field in sorted(unknown)})

        for field_name, value in changes.items():
            if value is None:
                continue
            if field_name == "price":
                value = _normalized_price(value)
            elif field_name == "image_urls":
                value = list(value)
            setattr(self, field_name, value)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name_en=self.name_en,
                price=self.price,
                in_stock=self.in_stock,
                featured=self.featured,
            )
        )

"""Pydantic request/response schemas for the storefront API.

These are external contracts, kept separate from the internal Protean
commands and aggregates.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, model_validator

from storefront.shared.money import sum_lines


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name_en: str = Field(min_length=1)
    name_fr: str = Field(min_length=1)
    description_en: str
    description_fr: str
    price: Decimal = Field(ge=0, decimal_places=2)
    category: str = Field(min_length=1)
    image_url: str
    image_urls: list[str] | None = None
    in_stock: bool = True
    featured: bool = False
    dimensions: str | None = None
    materials: str | None = None
    care_instructions: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name_en": "Handcrafted Ceramic Vase",
                    "name_fr": "Vase en céramique artisanal",
                    "description_en": "Wheel-thrown stoneware vase with a speckled glaze.",
                    "description_fr": "Vase en grès tourné au tour avec une glaçure mouchetée.",
                    "price": "45.00",
                    "category": "vases",
                    "image_url": "https://images.example.com/vase.jpg",
                    "featured": True,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name_en: str | None = Field(default=None, min_length=1)
    name_fr: str | None = Field(default=None, min_length=1)
    description_en: str | None = None
    description_fr: str | None = None
    price: Decimal | None = Field(default=None, ge=0, decimal_places=2)
    category: str | None = Field(default=None, min_length=1)
    image_url: str | None = None
    image_urls: list[str] | None = None
    in_stock: bool | None = None
    featured: bool | None = None
    dimensions: str | None = None
    materials: str | None = None
    care_instructions: str | None = None


class ProductResponse(BaseModel):
    id: str
    name_en: str
    name_fr: str
    description_en: str
    description_fr: str
    price: str
    category: str
    image_url: str
    image_urls: list[str]
    in_stock: bool
    featured: bool
    dimensions: str | None = None
    materials: str | None = None
    care_instructions: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name_en=product.name_en,
            name_fr=product.name_fr,
            description_en=product.description_en,
            description_fr=product.description_fr,
            price=product.price,
            category=product.category,
            image_url=product.image_url,
            image_urls=list(product.image_urls or []),
            in_stock=product.in_stock,
            featured=product.featured,
            dimensions=product.dimensions,
            materials=product.materials,
            care_instructions=product.care_instructions,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    session_id: str = Field(min_length=1)
    product_id: str
    quantity: int = Field(ge=1, default=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # zero or less removes the line


class CartItemIdResponse(BaseModel):
    item_id: str


class CartLineResponse(BaseModel):
    id: str
    session_id: str
    product_id: str
    quantity: int
    subtotal: str
    product: ProductResponse


class CartResponse(BaseModel):
    session_id: str
    items: list[CartLineResponse]
    subtotal: str


class ClearCartResponse(BaseModel):
    removed: int


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
class CheckoutItemSchema(BaseModel):
    product_id: str = Field(min_length=1, max_length=255)
    name_en: str = Field(min_length=1, max_length=255)
    name_fr: str = Field(min_length=1, max_length=255)
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0, decimal_places=2)
    image_url: str | None = Field(default=None, max_length=500)


# Upper bounds match the field limits on Order and OrderLine.
class CheckoutRequest(BaseModel):
    customer_name: str = Field(min_length=2, max_length=255)
    customer_email: EmailStr
    customer_phone: str | None = Field(default=None, max_length=50)
    shipping_address: str = Field(min_length=5, max_length=255)
    shipping_city: str = Field(min_length=2, max_length=100)
    shipping_postal_code: str = Field(min_length=3, max_length=20)
    shipping_country: str = Field(min_length=2, max_length=100)
    total: Decimal = Field(ge=0, decimal_places=2)
    items: list[CheckoutItemSchema] = Field(min_length=1)
    session_id: str | None = None

    @model_validator(mode="after")
    def total_matches_items(self):
        expected = sum_lines((item.price, item.quantity) for item in self.items)
        if self.total != expected:
            raise ValueError(f"total {self.total} does not match items ({expected})")
        return self


class CheckoutResponse(BaseModel):
    url: str


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Payment provider unavailable"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str


class WebhookAck(BaseModel):
    received: bool = True


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    street: str
    city: str
    postal_code: str
    country: str


class OrderLineResponse(BaseModel):
    product_id: str
    name_en: str
    name_fr: str
    quantity: int
    price: str
    image_url: str | None = None


class OrderResponse(BaseModel):
    id: str
    checkout_session_id: str
    customer_name: str
    customer_email: str
    customer_phone: str | None = None
    shipping_address: ShippingAddressSchema
    total: str
    status: str
    items: list[OrderLineResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        address = order.shipping_address
        return cls(
            id=str(order.id),
            checkout_session_id=order.checkout_session_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            shipping_address=ShippingAddressSchema(
                street=address.street,
                city=address.city,
                postal_code=address.postal_code,
                country=address.country,
            ),
            total=order.total,
            status=order.status,
            items=[
                OrderLineResponse(
                    product_id=str(line.product_id),
                    name_en=line.name_en,
                    name_fr=line.name_fr,
                    quantity=line.quantity,
                    price=line.price,
                    image_url=line.image_url,
                )
                for line in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class UpdateOrderStatusRequest(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"

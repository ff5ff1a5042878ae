"""Catalogue management: admin commands and handler."""

import json

from protean import handle
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    name_en = String(required=True, max_length=255)
    name_fr = String(required=True, max_length=255)
    description_en = Text(required=True)
    description_fr = Text(required=True)
    price = String(required=True, max_length=20)
    category = String(required=True, max_length=100)
    image_url = String(required=True, max_length=500)
    image_urls = Text()  # JSON: list of image URLs
    in_stock = Boolean(default=True)
    featured = Boolean(default=False)
    dimensions = String(max_length=255)
    materials = String(max_length=255)
    care_instructions = String(max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Partial update; fields left as None keep their current value."""

    product_id = Identifier(required=True)
    name_en = String(max_length=255)
    name_fr = String(max_length=255)
    description_en = Text()
    description_fr = Text()
    price = String(max_length=20)
    category = String(max_length=100)
    image_url = String(max_length=500)
    image_urls = Text()  # JSON: list of image URLs
    in_stock = Boolean()
    featured = Boolean()
    dimensions = String(max_length=255)
    materials = String(max_length=255)
    care_instructions = String(max_length=500)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


def _decode_urls(value):
    if value is None:
        return None
    return json.loads(value) if isinstance(value, str) else list(value)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name_en=command.name_en,
            name_fr=command.name_fr,
            description_en=command.description_en,
            description_fr=command.description_fr,
            price=command.price,
            category=command.category,
            image_url=command.image_url,
            image_urls=_decode_urls(command.image_urls),
            in_stock=command.in_stock,
            featured=command.featured,
            dimensions=command.dimensions,
            materials=command.materials,
            care_instructions=command.care_instructions,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name_en=command.name_en,
            name_fr=command.name_fr,
            description_en=command.description_en,
            description_fr=command.description_fr,
            price=command.price,
            category=command.category,
            image_url=command.image_url,
            image_urls=_decode_urls(command.image_urls),
            in_stock=command.in_stock,
            featured=command.featured,
            dimensions=command.dimensions,
            materials=command.materials,
            care_instructions=command.care_instructions,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

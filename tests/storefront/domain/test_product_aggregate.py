"""Tests for the Product aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import ProductAdded, ProductUpdated
from storefront.catalogue.product import Product


def _make_product(**overrides):
    defaults = {
        "name_en": "Rustic Terracotta Bowl",
        "name_fr": "Bol en Terre Cuite Rustique",
        "description_en": "A handcrafted terracotta bowl.",
        "description_fr": "Un bol en terre cuite fait main.",
        "price": "45",
        "category": "bowls",
        "image_url": "https://images.example.com/bowl.jpg",
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_price_is_normalized(self):
        product = _make_product()
        assert product.price == "45.00"

    def test_defaults(self):
        product = _make_product()
        assert product.in_stock is True
        assert product.featured is False
        assert product.created_at is not None

    def test_gallery_defaults_to_main_image(self):
        product = _make_product()
        assert product.image_urls == ["https://images.example.com/bowl.jpg"]

    def test_explicit_gallery_is_kept(self):
        product = _make_product(image_urls=["https://a.example.com/1.jpg", "https://a.example.com/2.jpg"])
        assert len(product.image_urls) == 2

    def test_raises_product_added(self):
        product = _make_product()
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, ProductAdded)
        assert event.price == "45.00"

    @pytest.mark.parametrize("price", ["-5", "12.345", "free"])
    def test_invalid_price_rejected(self, price):
        with pytest.raises(ValidationError) as exc:
            _make_product(price=price)
        assert "price" in exc.value.messages


class TestProductUpdate:
    def test_partial_update_keeps_other_fields(self):
        product = _make_product()
        product.update_details(price="52.5", name_en=None)
        assert product.price == "52.50"
        assert product.name_en == "Rustic Terracotta Bowl"

    def test_toggle_stock(self):
        product = _make_product()
        product.update_details(in_stock=False)
        assert product.in_stock is False

    def test_raises_product_updated(self):
        product = _make_product()
        product._events.clear()
        product.update_details(featured=True)
        assert isinstance(product._events[-1], ProductUpdated)
        assert product._events[-1].featured is True

    def test_unknown_field_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(sku="BOWL-1")

    def test_unit_price(self):
        product = _make_product(price="68.00")
        assert str(product.unit_price) == "68.00"

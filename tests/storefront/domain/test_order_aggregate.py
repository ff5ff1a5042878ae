"""Tests for Order aggregate creation and status updates."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError

from storefront.order.events import OrderPlaced, OrderStatusChanged
from storefront.order.order import Order, OrderStatus


def _lines():
    return [
        {
            "product_id": "prod-001",
            "name_en": "Rustic Terracotta Bowl",
            "name_fr": "Bol en Terre Cuite Rustique",
            "quantity": 2,
            "price": "45.00",
            "image_url": "https://images.example.com/bowl.jpg",
        },
        {
            "product_id": "prod-002",
            "name_en": "Speckled Stoneware Vase",
            "name_fr": "Vase en Grès Moucheté",
            "quantity": 1,
            "price": "68.00",
        },
    ]


def _place(**overrides):
    defaults = {
        "checkout_session_id": "cs_test_123",
        "customer_name": "Marie Tremblay",
        "customer_email": "marie@example.com",
        "shipping_address": {
            "street": "123 Rue Principale",
            "city": "Montréal",
            "postal_code": "H2X 1Y4",
            "country": "Canada",
        },
        "total": "158.00",
        "lines": _lines(),
    }
    defaults.update(overrides)
    return Order.place(**defaults)


class TestOrderPlacement:
    def test_starts_pending(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value

    def test_lines_are_stored(self):
        order = _place()
        assert len(order.items) == 2
        assert {line.product_id for line in order.items} == {"prod-001", "prod-002"}

    def test_total_matches_lines(self):
        order = _place()
        assert order.total == "158.00"
        assert sum(line.subtotal for line in order.items) == Decimal("158.00")

    def test_shipping_address_value_object(self):
        order = _place()
        assert order.shipping_address.city == "Montréal"
        assert order.shipping_address.postal_code == "H2X 1Y4"

    def test_raises_order_placed(self):
        order = _place()
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.checkout_session_id == "cs_test_123"
        assert event.item_count == 2
        assert event.total == "158.00"

    def test_total_mismatch_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place(total="100.00")
        assert "total" in exc.value.messages

    def test_needs_at_least_one_line(self):
        with pytest.raises(ValidationError) as exc:
            _place(lines=[], total="0.00")
        assert "items" in exc.value.messages

    def test_invalid_amount_rejected(self):
        with pytest.raises(ValidationError):
            _place(total="158.001")


class TestOrderStatus:
    @pytest.mark.parametrize("status", [s.value for s in OrderStatus])
    def test_any_known_status_can_be_set(self, status):
        order = _place()
        order.update_status(status)
        assert order.status == status

    def test_no_transition_rules(self):
        order = _place()
        order.update_status("delivered")
        order.update_status("pending")
        assert order.status == "pending"

    def test_raises_status_changed(self):
        order = _place()
        order._events.clear()
        order.update_status("shipped")
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderStatusChanged)
        assert event.previous_status == "pending"
        assert event.new_status == "shipped"

    def test_unknown_status_rejected(self):
        order = _place()
        with pytest.raises(ValidationError) as exc:
            order.update_status("lost")
        assert "status" in exc.value.messages
        assert order.status == "pending"

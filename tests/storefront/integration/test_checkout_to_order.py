"""Carts taken from checkout through a signed webhook to a recorded order.

Each cart is checked out through the API, the provider's completion event is
built from the metadata the gateway was given, and the stored order must add
up to what the customer paid.
"""

import json
import random
from decimal import Decimal

import pytest

from storefront.shared.money import CENT


def _line(product_id, price, quantity):
    return {
        "product_id": product_id,
        "name_en": f"Piece {product_id}",
        "name_fr": f"Pièce {product_id}",
        "quantity": quantity,
        "price": price,
        "image_url": f"https://images.example.com/{product_id}.jpg",
    }


def _generated_cart(seed):
    rng = random.Random(seed)
    shelf = {f"p{index}": f"{Decimal(rng.randint(1, 99999)) / 100:.2f}" for index in range(1, 5)}
    lines = []
    for _ in range(rng.randint(1, 7)):
        product_id = rng.choice(sorted(shelf))
        price = shelf[product_id] if rng.random() < 0.8 else f"{Decimal(rng.randint(1, 9999)) / 100:.2f}"
        lines.append(_line(product_id, price, rng.randint(1, 5)))
    return lines


CARTS = [
    pytest.param([_line("p1", "0.01", 1)], id="one-cent"),
    pytest.param([_line("p1", "45.00", 2), _line("p2", "68.00", 1)], id="two-lines"),
    pytest.param([_line("p1", "19.99", 3), _line("p2", "33.33", 3), _line("p3", "0.05", 7)], id="cent-prices"),
    pytest.param([_line("p1", "12.50", 1), _line("p2", "8.00", 2), _line("p1", "12.50", 4)], id="duplicate-product"),
    pytest.param([_line("p1", "12.50", 1), _line("p1", "10.00", 1)], id="same-product-two-prices"),
    *(pytest.param(_generated_cart(seed), id=f"generated-{seed}") for seed in range(12)),
]


def _expected_lines(lines):
    merged = {}
    for line in lines:
        key = (line["product_id"], Decimal(line["price"]))
        merged[key] = merged.get(key, 0) + line["quantity"]
    return sorted((product_id, price, quantity) for (product_id, price), quantity in merged.items())


def _checkout_body(lines):
    total = sum((Decimal(line["price"]) * line["quantity"] for line in lines), Decimal("0")).quantize(CENT)
    return {
        "customer_name": "Marie Tremblay",
        "customer_email": "marie@example.com",
        "shipping_address": "123 Rue Principale",
        "shipping_city": "Montréal",
        "shipping_postal_code": "H2X 1Y4",
        "shipping_country": "Canada",
        "total": f"{total:.2f}",
        "items": lines,
    }


@pytest.mark.parametrize("lines", CARTS)
def test_paid_cart_is_recorded_as_ordered(client, gateway, lines):
    body = _checkout_body(lines)

    response = client.post("/api/create-checkout-session", json=body)
    assert response.status_code == 200
    checkout_session_id = response.json()["url"].rsplit("/", 1)[-1]

    sent = gateway.calls[-1]
    assert sum(item.unit_amount * item.quantity for item in sent["line_items"]) == int(Decimal(body["total"]) * 100)

    payload = json.dumps(
        {
            "id": f"evt_{checkout_session_id}",
            "type": "checkout.session.completed",
            "data": {"object": {"id": checkout_session_id, "metadata": sent["metadata"]}},
        }
    ).encode()
    delivered = client.post(
        "/webhook",
        content=payload,
        headers={"Stripe-Signature": gateway.sign_payload(payload), "Content-Type": "application/json"},
    )
    assert delivered.status_code == 200

    order = client.get(f"/api/orders/by-checkout-session/{checkout_session_id}").json()
    assert order["total"] == body["total"]
    stored = sorted((line["product_id"], Decimal(line["price"]), line["quantity"]) for line in order["items"])
    assert stored == _expected_lines(lines)
    assert sum(price * quantity for _, price, quantity in stored) == Decimal(body["total"])
    assert {line["name_fr"] for line in order["items"]} <= {line["name_fr"] for line in lines}

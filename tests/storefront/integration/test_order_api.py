"""Integration tests for the admin order endpoints."""

import pytest
from protean import current_domain

from storefront.order.order import Order


@pytest.fixture()
def order_id():
    order = Order.place(
        checkout_session_id="cs_test_admin",
        customer_name="Marie Tremblay",
        customer_email="marie@example.com",
        customer_phone="514-555-0199",
        shipping_address={
            "street": "123 Rue Principale",
            "city": "Montréal",
            "postal_code": "H2X 1Y4",
            "country": "Canada",
        },
        total="158.00",
        lines=[
            {"product_id": "p1", "name_en": "Bowl", "name_fr": "Bol", "quantity": 2, "price": "45.00"},
            {"product_id": "p2", "name_en": "Vase", "name_fr": "Vase", "quantity": 1, "price": "68.00"},
        ],
    )
    current_domain.repository_for(Order).add(order)
    return str(order.id)


class TestOrderReadAPI:
    def test_list_orders(self, client, order_id):
        response = client.get("/api/orders")
        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [order_id]

    def test_list_paging_bounds(self, client):
        assert client.get("/api/orders", params={"limit": 0}).status_code == 422
        assert client.get("/api/orders", params={"offset": -1}).status_code == 422

    def test_list_returns_every_order_by_default(self, client):
        repo = current_domain.repository_for(Order)
        for index in range(101):
            repo.add(
                Order.place(
                    checkout_session_id=f"cs_test_bulk_{index:03d}",
                    customer_name="Marie Tremblay",
                    customer_email="marie@example.com",
                    shipping_address={
                        "street": "123 Rue Principale",
                        "city": "Montréal",
                        "postal_code": "H2X 1Y4",
                        "country": "Canada",
                    },
                    total="45.00",
                    lines=[{"product_id": "p1", "name_en": "Bowl", "name_fr": "Bol", "quantity": 1, "price": "45.00"}],
                )
            )

        assert len(client.get("/api/orders").json()) == 101
        assert len(client.get("/api/orders", params={"limit": 10}).json()) == 10
        assert len(client.get("/api/orders", params={"offset": 100}).json()) == 1

    def test_get_order_with_lines(self, client, order_id):
        body = client.get(f"/api/orders/{order_id}").json()
        assert body["status"] == "pending"
        assert body["total"] == "158.00"
        assert body["shipping_address"]["city"] == "Montréal"
        assert sorted((line["product_id"], line["quantity"]) for line in body["items"]) == [("p1", 2), ("p2", 1)]

    def test_unknown_order_is_404(self, client):
        assert client.get("/api/orders/missing").status_code == 404

    def test_unknown_checkout_session_is_404(self, client):
        assert client.get("/api/orders/by-checkout-session/cs_unknown").status_code == 404


class TestOrderStatusAPI:
    def test_update_status(self, client, order_id):
        response = client.patch(f"/api/orders/{order_id}", json={"status": "shipped"})
        assert response.status_code == 200
        assert response.json()["status"] == "shipped"

    def test_unknown_status_is_400(self, client, order_id):
        response = client.patch(f"/api/orders/{order_id}", json={"status": "lost"})
        assert response.status_code == 400
        assert client.get(f"/api/orders/{order_id}").json()["status"] == "pending"

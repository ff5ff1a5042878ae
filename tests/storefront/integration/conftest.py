import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import cart_router, checkout_router, order_router, product_router, webhook_router


@pytest.fixture()
def client():
    app = FastAPI()
    for router in (product_router, cart_router, checkout_router, webhook_router, order_router):
        app.include_router(router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def create_product(client):
    def _create(**overrides):
        body = {
            "name_en": "Rustic Terracotta Bowl",
            "name_fr": "Bol en Terre Cuite Rustique",
            "description_en": "A handcrafted terracotta bowl.",
            "description_fr": "Un bol en terre cuite fait main.",
            "price": "45.00",
            "category": "bowls",
            "image_url": "https://images.example.com/bowl.jpg",
        }
        body.update(overrides)
        response = client.post("/api/products", json=body)
        assert response.status_code == 201
        return response.json()["product_id"]

    return _create

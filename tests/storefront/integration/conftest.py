import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api import admin_router, cart_router, order_router, product_router
from storefront.api.errors import register_error_handlers
from tests.storefront.helpers import ADMIN


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(admin_router)
    app.include_router(product_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def make_product(client):
    def _make(**overrides):
        payload = {"title": "Espresso Cup", "price": 12.5, "stock": 10, "category": "kitchen"}
        payload.update(overrides)
        response = client.post("/products", json=payload, headers=ADMIN)
        assert response.status_code == 201
        return response.json()["product_id"]

    return _make

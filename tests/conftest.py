import pytest
from fastapi.testclient import TestClient

from shopcart.api import create_app
from shopcart.domain.cart import Cart


@pytest.fixture
def cart() -> Cart:
    return Cart()


@pytest.fixture
def test_client(cart: Cart):
    """Client bound to a fresh app whose cart is the `cart` fixture."""
    app = create_app(cart)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def widget() -> dict:
    return {
        "productId": "123",
        "name": "Widget",
        "price": 29.99,
        "quantity": 2,
    }

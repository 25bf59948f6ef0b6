"""Unit tests for the cart use-case layer."""
import logging
from decimal import Decimal

import pytest

from shopcart.domain.exceptions import NotFoundError, ValidationError
from shopcart.services.cart_service import CartService


@pytest.fixture
def service(cart) -> CartService:
    return CartService(cart)


class TestQueries:
    def test_get_cart_empty(self, service):
        result = service.get_cart()

        assert result["items"] == []
        assert result["total"] == Decimal("0.00")
        assert result["item_count"] == 0

    def test_get_cart_summarises_items(self, service):
        service.add_item("123", "Widget", 29.99, 2)
        service.add_item("456", "Gadget", 10, 3)

        result = service.get_cart()

        assert [i.product_id for i in result["items"]] == ["123", "456"]
        assert result["total"] == Decimal("89.98")
        assert result["item_count"] == 2

    def test_get_item(self, service):
        service.add_item("123", "Widget", 29.99, 2)

        assert service.get_item("123").quantity == 2
        assert service.get_item("999") is None


class TestCommands:
    def test_add_item_is_logged(self, service, caplog):
        caplog.set_level(logging.INFO, logger="shopcart")

        service.add_item("123", "Widget", 29.99, 2)

        assert "Product 123 in cart with quantity 2" in caplog.text

    def test_rejected_add_is_logged_and_reraised(self, service, caplog):
        caplog.set_level(logging.INFO, logger="shopcart")

        with pytest.raises(ValidationError):
            service.add_item("123", "Widget", -1, 2)

        assert any(r.levelno == logging.WARNING for r in caplog.records)
        assert service.get_cart()["item_count"] == 0

    def test_update_quantity(self, service):
        service.add_item("123", "Widget", 29.99, 2)

        item = service.update_quantity("123", 5)

        assert item.quantity == 5
        assert service.get_cart()["total"] == Decimal("149.95")

    def test_update_unknown_product(self, service):
        with pytest.raises(NotFoundError):
            service.update_quantity("999", 5)

    def test_remove_item(self, service):
        service.add_item("123", "Widget", 29.99, 2)

        service.remove_item("123")

        assert service.get_item("123") is None

    def test_remove_unknown_product(self, service):
        with pytest.raises(NotFoundError):
            service.remove_item("999")

    def test_clear(self, service, caplog):
        caplog.set_level(logging.INFO, logger="shopcart")
        service.add_item("123", "Widget", 29.99, 2)

        service.clear()

        assert service.get_cart()["items"] == []
        assert "Cart cleared" in caplog.text

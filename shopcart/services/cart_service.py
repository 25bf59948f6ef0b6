# shopcart/services/cart_service.py
from typing import Any, Dict

from shopcart.domain.cart import Cart, LineItem
from shopcart.domain.exceptions import CartError
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases for the cart.
    Queries (get_cart, get_item) only read; commands (add, update, remove,
    clear) change state and are logged. Domain errors propagate to the caller.
    """

    def __init__(self, cart: Cart):
        self.cart = cart

    # =====================================================
    # QUERY
    # =====================================================
    def get_cart(self) -> Dict[str, Any]:
        items, total = self.cart.summary()

        return {
            "items": items,
            "total": total,
            "item_count": len(items),
        }

    def get_item(self, product_id: str) -> LineItem | None:
        return self.cart.find(product_id)

    # =====================================================
    # COMMANDS
    # =====================================================
    def add_item(self, product_id: str, name: str, price: Any, quantity: Any) -> LineItem:
        try:
            item = self.cart.add(product_id, name, price, quantity)
        except CartError as e:
            logger.warning(f"Rejected add of product {product_id}: {e.message}")
            raise

        logger.info(
            f"Product {item.product_id} in cart with quantity {item.quantity}, "
            f"cart now holds {self.cart.count()} item(s)"
        )
        return item

    def update_quantity(self, product_id: str, quantity: Any) -> LineItem:
        try:
            item = self.cart.update_quantity(product_id, quantity)
        except CartError as e:
            logger.warning(f"Rejected quantity update of product {product_id}: {e.message}")
            raise

        logger.info(f"Quantity of product {product_id} set to {item.quantity}")
        return item

    def remove_item(self, product_id: str) -> None:
        try:
            self.cart.remove(product_id)
        except CartError as e:
            logger.warning(f"Rejected removal of product {product_id}: {e.message}")
            raise

        logger.info(f"Product {product_id} removed from cart")

    def clear(self) -> None:
        self.cart.clear()
        logger.info("Cart cleared")

# shopcart/domain/cart.py
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, List, Tuple

from shopcart.domain.exceptions import (
    MissingFieldError,
    NonPositiveValueError,
    NotFoundError,
    ValidationError,
)


class DuplicatePolicy(str, Enum):
    """What `Cart.add` does when the product is already in the cart."""

    MERGE = "merge"
    REPLACE = "replace"


@dataclass
class LineItem:
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    added_at: datetime
    updated_at: datetime | None = None

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


def _sum_subtotals(items: Iterable[LineItem]) -> Decimal:
    return sum((i.subtotal for i in items), Decimal("0.00"))


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def _to_price(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("unit_price must be a number")
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("unit_price must be a number")
    if not price.is_finite():
        raise ValidationError("unit_price must be a finite number")
    return price


def _to_quantity(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("quantity must be an integer")
    return value


class Cart:
    """
    In-memory shopping cart, keyed by product id and kept in insertion order.

    Adding a product that is already in the cart follows the cart's
    duplicate policy:

    - ``DuplicatePolicy.MERGE`` (default): the new quantity is added to the
      existing one; name and unit price from the first add are kept.
    - ``DuplicatePolicy.REPLACE``: name, unit price and quantity are
      overwritten with the new values.

    In both cases the item keeps its original position and ``updated_at`` is
    stamped. Every operation validates before mutating, so a failed call
    leaves the cart untouched.

    All public methods hold one lock for their whole duration; none of them
    calls another, so the lock is never taken twice by the same thread.
    Items handed out are copies; mutating them does not affect the cart.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.MERGE):
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)
        self._items: Dict[str, LineItem] = {}
        self._lock = threading.Lock()

    # queries

    def list(self) -> List[LineItem]:
        with self._lock:
            return [replace(item) for item in self._items.values()]

    def total(self) -> Decimal:
        with self._lock:
            return _sum_subtotals(self._items.values())

    def summary(self) -> Tuple[List[LineItem], Decimal]:
        """Items and their total, taken under one lock so they always agree."""
        with self._lock:
            items = [replace(item) for item in self._items.values()]
            return items, _sum_subtotals(items)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def find(self, product_id: str) -> LineItem | None:
        with self._lock:
            item = self._items.get(product_id)
            return replace(item) if item is not None else None

    # commands

    def add(self, product_id: str, name: str, unit_price: Any, quantity: Any) -> LineItem:
        fields = {
            "product_id": product_id,
            "name": name,
            "unit_price": unit_price,
            "quantity": quantity,
        }
        missing = [field for field, value in fields.items() if _is_missing(value)]
        if missing:
            raise MissingFieldError(missing)

        price = _to_price(unit_price)
        quantity = _to_quantity(quantity)
        if price <= 0:
            raise NonPositiveValueError("unit_price")
        if quantity <= 0:
            raise NonPositiveValueError("quantity")

        with self._lock:
            existing = self._items.get(product_id)

            if existing is None:
                item = LineItem(
                    product_id=product_id,
                    name=name,
                    unit_price=price,
                    quantity=quantity,
                    added_at=_now(),
                )
                self._items[product_id] = item
                return replace(item)

            if self.duplicate_policy is DuplicatePolicy.MERGE:
                existing.quantity += quantity
            else:
                existing.name = name
                existing.unit_price = price
                existing.quantity = quantity
            existing.updated_at = _now()
            return replace(existing)

    def update_quantity(self, product_id: str, quantity: Any) -> LineItem:
        if quantity is None:
            raise MissingFieldError(["quantity"])
        quantity = _to_quantity(quantity)
        if quantity <= 0:
            raise NonPositiveValueError("quantity")

        with self._lock:
            item = self._items.get(product_id)
            if item is None:
                raise NotFoundError(product_id)

            item.quantity = quantity
            item.updated_at = _now()
            return replace(item)

    def remove(self, product_id: str) -> None:
        with self._lock:
            if product_id not in self._items:
                raise NotFoundError(product_id)
            del self._items[product_id]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

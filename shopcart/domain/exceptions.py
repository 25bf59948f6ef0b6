# shopcart/domain/exceptions.py
from typing import Iterable


class CartError(Exception):
    """Base class for errors raised by the cart aggregate."""

    category = "Cart error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CartError):
    """Malformed or out-of-range input. Always the caller's problem."""

    category = "Invalid data"


class MissingFieldError(ValidationError):
    category = "Missing required fields"

    def __init__(self, fields: Iterable[str]):
        self.fields = list(fields)
        if len(self.fields) == 1:
            message = f"The field {self.fields[0]} is required"
        else:
            message = f"All fields are required: {', '.join(self.fields)}"
        super().__init__(message)


class NonPositiveValueError(ValidationError):
    category = "Invalid value"

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} must be greater than zero")


class NotFoundError(CartError):
    category = "Product not found"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} was not found in the cart")

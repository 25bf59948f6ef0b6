# shopcart/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Dict, List

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from shopcart.domain.cart import LineItem

# Prices stay Decimal internally and go out as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ItemIn(CamelModel):
    """Body for adding a product. Presence and ranges are checked by the cart."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    product_id: str | None = Field(None, description="Unique product id")
    name: str | None = Field(None, description="Product name")
    price: float | None = Field(None, allow_inf_nan=False, description="Unit price (must be > 0)")
    quantity: int | None = Field(None, description="Quantity (must be > 0)")


class QuantityIn(CamelModel):
    """Body for changing the quantity of a product."""

    quantity: int | None = Field(None, description="New quantity (must be > 0)")


class LineItemOut(CamelModel):
    """Product in the cart (response)."""

    product_id: str
    name: str
    price: Money
    quantity: int
    added_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_item(cls, item: LineItem) -> "LineItemOut":
        return cls(
            product_id=item.product_id,
            name=item.name,
            price=item.unit_price,
            quantity=item.quantity,
            added_at=item.added_at,
            updated_at=item.updated_at,
        )


class CartOut(CamelModel):
    items: List[LineItemOut]
    total: Money
    item_count: int


class CartResponse(CamelModel):
    success: bool = True
    data: CartOut


class ItemResponse(CamelModel):
    success: bool = True
    message: str | None = None
    data: LineItemOut


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class ErrorResponse(CamelModel):
    success: bool = False
    error: str
    message: str | None = None
    available_routes: Dict[str, str] | None = None

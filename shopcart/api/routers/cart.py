# shopcart/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException, Request, status

from shopcart.domain.cart import Cart
from shopcart.domain.exceptions import (
    CartError,
    MissingFieldError,
    NonPositiveValueError,
    NotFoundError,
    ValidationError,
)
from shopcart.domain.schemas import (
    CartOut,
    CartResponse,
    ErrorResponse,
    ItemIn,
    ItemResponse,
    LineItemOut,
    MessageResponse,
    QuantityIn,
)
from shopcart.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def get_cart(request: Request) -> Cart:
    return request.app.state.cart


def get_service(cart: Cart = Depends(get_cart)) -> CartService:
    return CartService(cart)


# cart attribute -> field name in the request body
WIRE_FIELDS = {"product_id": "productId", "unit_price": "price"}


def _wire(field: str) -> str:
    return WIRE_FIELDS.get(field, field)


def _for_client(e: ValidationError) -> ValidationError:
    """Re-state a validation error using the request body field names."""
    if isinstance(e, MissingFieldError):
        return MissingFieldError([_wire(f) for f in e.fields])
    if isinstance(e, NonPositiveValueError):
        return NonPositiveValueError(_wire(e.field))
    return e


def _http_error(status_code: int, e: CartError) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={"error": e.category, "message": e.message},
    )


@router.get("", response_model=CartResponse)
def list_cart(svc: CartService = Depends(get_service)):
    """Every product in the cart, with the total and the number of distinct products."""
    cart = svc.get_cart()
    return CartResponse(
        data=CartOut(
            items=[LineItemOut.from_item(i) for i in cart["items"]],
            total=cart["total"],
            item_count=cart["item_count"],
        )
    )


@router.post(
    "",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def add_item(payload: ItemIn, svc: CartService = Depends(get_service)):
    """
    Add a product to the cart.
    If the product is already there its quantity is increased (or the item
    replaced, depending on CART_DUPLICATE_POLICY).
    """
    try:
        item = svc.add_item(
            product_id=payload.product_id,
            name=payload.name,
            price=payload.price,
            quantity=payload.quantity,
        )
    except ValidationError as e:
        raise _http_error(status.HTTP_400_BAD_REQUEST, _for_client(e))

    return ItemResponse(
        message="Product added to cart",
        data=LineItemOut.from_item(item),
    )


# declared before /{product_id} so "clear" is not taken as a product id
@router.delete("/clear", response_model=MessageResponse)
def clear_cart(svc: CartService = Depends(get_service)):
    svc.clear()
    return MessageResponse(message="Cart cleared")


@router.get(
    "/{product_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_item(product_id: str, svc: CartService = Depends(get_service)):
    item = svc.get_item(product_id)
    if item is None:
        raise _http_error(status.HTTP_404_NOT_FOUND, NotFoundError(product_id))
    return ItemResponse(data=LineItemOut.from_item(item))


@router.put(
    "/{product_id}",
    response_model=ItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_quantity(
    product_id: str,
    payload: QuantityIn,
    svc: CartService = Depends(get_service),
):
    try:
        item = svc.update_quantity(product_id, payload.quantity)
    except ValidationError as e:
        raise _http_error(status.HTTP_400_BAD_REQUEST, _for_client(e))
    except NotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)

    return ItemResponse(
        message="Quantity updated",
        data=LineItemOut.from_item(item),
    )


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
def remove_item(product_id: str, svc: CartService = Depends(get_service)):
    try:
        svc.remove_item(product_id)
    except NotFoundError as e:
        raise _http_error(status.HTTP_404_NOT_FOUND, e)

    return MessageResponse(message="Product removed from cart")

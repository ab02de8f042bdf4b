"""FastAPI routes for the cart.

Thin adapters: schema -> command -> envelope. Reads go to the repository.
"""

import json

from fastapi import APIRouter, Body, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal
from storefront.api.schemas import (
    AddCartItemRequest,
    ApplyCouponRequest,
    Envelope,
    MergeCartRequest,
    RemoveCartItemRequest,
    ShippingMethodRequest,
    UpdateCartItemRequest,
)
from storefront.api.views import cart_view
from storefront.auth.tokens import Principal
from storefront.cart.coupons import ApplyCoupon, RemoveCoupon
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItemQuantity
from storefront.cart.lookup import find_cart, load_cart
from storefront.cart.management import ClearCart, MergeGuestCart, OpenCart
from storefront.cart.shipping import SelectShippingMethod
from storefront.catalogue.lookup import load_products

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_data(customer_id) -> dict:
    cart = load_cart(customer_id)
    products = load_products(item.product_id for item in cart.items)
    return {"cart": cart_view(cart, products)}


def _variant(body) -> dict:
    return body.variant.model_dump() if body is not None and body.variant else {}


@router.get("", response_model=Envelope, response_model_exclude_none=True)
async def get_cart(principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(OpenCart(customer_id=principal.id), asynchronous=False)
    return Envelope(data=_cart_data(principal.id))


@router.post("/items", status_code=201, response_model=Envelope, response_model_exclude_none=True)
async def add_cart_item(body: AddCartItemRequest, principal: Principal = Depends(current_principal)) -> Envelope:
    command = AddToCart(
        customer_id=principal.id,
        product_id=body.product_id,
        quantity=body.quantity,
        variant=_variant(body),
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Item added to cart successfully", data=_cart_data(principal.id))


@router.put("/items/{product_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    principal: Principal = Depends(current_principal),
) -> Envelope:
    command = UpdateCartItemQuantity(
        customer_id=principal.id,
        product_id=product_id,
        quantity=body.quantity,
        variant=_variant(body),
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Cart item updated successfully", data=_cart_data(principal.id))


@router.delete("/items/{product_id}", response_model=Envelope, response_model_exclude_none=True)
async def remove_cart_item(
    product_id: str,
    body: RemoveCartItemRequest | None = Body(default=None),
    principal: Principal = Depends(current_principal),
) -> Envelope:
    command = RemoveFromCart(customer_id=principal.id, product_id=product_id, variant=_variant(body))
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Item removed from cart successfully", data=_cart_data(principal.id))


@router.delete("", response_model=Envelope, response_model_exclude_none=True)
async def clear_cart(principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(ClearCart(customer_id=principal.id), asynchronous=False)
    return Envelope(message="Cart cleared successfully", data=_cart_data(principal.id))


@router.post("/coupon", response_model=Envelope, response_model_exclude_none=True)
async def apply_coupon(body: ApplyCouponRequest, principal: Principal = Depends(current_principal)) -> Envelope:
    command = ApplyCoupon(
        customer_id=principal.id,
        code=body.code,
        discount=body.discount,
        discount_type=body.type,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Coupon applied successfully", data=_cart_data(principal.id))


@router.delete("/coupon", response_model=Envelope, response_model_exclude_none=True)
async def remove_coupon(principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(RemoveCoupon(customer_id=principal.id), asynchronous=False)
    return Envelope(message="Coupon removed successfully", data=_cart_data(principal.id))


@router.put("/shipping", response_model=Envelope, response_model_exclude_none=True)
async def select_shipping_method(
    body: ShippingMethodRequest, principal: Principal = Depends(current_principal)
) -> Envelope:
    command = SelectShippingMethod(customer_id=principal.id, shipping_method=body.method)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Shipping method updated successfully", data=_cart_data(principal.id))


@router.get("/validate", response_model=Envelope, response_model_exclude_none=True)
async def validate_cart(principal: Principal = Depends(current_principal)) -> Envelope:
    cart = load_cart(principal.id)
    report = cart.validate_stock(load_products(item.product_id for item in cart.items))
    return Envelope(data=report)


@router.post("/merge", response_model=Envelope, response_model_exclude_none=True)
async def merge_guest_cart(body: MergeCartRequest, principal: Principal = Depends(current_principal)) -> Envelope:
    command = MergeGuestCart(customer_id=principal.id, guest_cart=json.dumps(body.guest_cart.model_dump()))
    result = current_domain.process(command, asynchronous=False)
    data = _cart_data(principal.id)
    data["skipped"] = result["skipped"]
    return Envelope(message="Carts merged successfully", data=data)


@router.get("/count", response_model=Envelope, response_model_exclude_none=True)
async def cart_count(principal: Principal = Depends(current_principal)) -> Envelope:
    cart = find_cart(principal.id)
    return Envelope(data={"count": cart.item_count if cart else 0})

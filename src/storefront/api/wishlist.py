"""FastAPI routes for the wishlist, including the public shared view."""

from fastapi import APIRouter, Body, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal, get_settings
from storefront.api.schemas import (
    AddWishlistItemRequest,
    Envelope,
    MoveToCartRequest,
    Priority,
    UpdateWishlistItemRequest,
    WishlistSettingsRequest,
)
from storefront.api.views import cart_view, wishlist_item_view, wishlist_view
from storefront.auth.tokens import Principal
from storefront.cart.lookup import load_cart
from storefront.catalogue.lookup import load_products
from storefront.config import Settings
from storefront.wishlist.items import AddToWishlist, ClearWishlist, RemoveFromWishlist, UpdateWishlistItem
from storefront.wishlist.lookup import find_by_share_token, find_wishlist, load_wishlist
from storefront.wishlist.sharing import OpenWishlist, RevokeWishlistSharing, ShareWishlist, UpdateWishlistSettings
from storefront.wishlist.transfer import MoveWishlistItemToCart

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


def _wishlist_data(customer_id) -> dict:
    wishlist = load_wishlist(customer_id)
    return {"wishlist": wishlist_view(wishlist, load_products(item.product_id for item in wishlist.items))}


@router.get("", response_model=Envelope, response_model_exclude_none=True)
async def get_wishlist(principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(OpenWishlist(customer_id=principal.id), asynchronous=False)
    return Envelope(data=_wishlist_data(principal.id))


@router.post("/items", status_code=201, response_model=Envelope, response_model_exclude_none=True)
async def add_wishlist_item(body: AddWishlistItemRequest, principal: Principal = Depends(current_principal)) -> Envelope:
    command = AddToWishlist(
        customer_id=principal.id,
        product_id=body.product_id,
        notes=body.notes,
        priority=body.priority,
        variant=body.variant.model_dump() if body.variant else {},
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Item added to wishlist successfully", data=_wishlist_data(principal.id))


@router.put("/items/{product_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_wishlist_item(
    product_id: str,
    body: UpdateWishlistItemRequest,
    principal: Principal = Depends(current_principal),
) -> Envelope:
    command = UpdateWishlistItem(
        customer_id=principal.id,
        product_id=product_id,
        notes=body.notes,
        priority=body.priority,
    )
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Wishlist item updated successfully", data=_wishlist_data(principal.id))


@router.delete("/items/{product_id}", response_model=Envelope, response_model_exclude_none=True)
async def remove_wishlist_item(product_id: str, principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(RemoveFromWishlist(customer_id=principal.id, product_id=product_id), asynchronous=False)
    return Envelope(message="Item removed from wishlist successfully", data=_wishlist_data(principal.id))


@router.delete("", response_model=Envelope, response_model_exclude_none=True)
async def clear_wishlist(principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(ClearWishlist(customer_id=principal.id), asynchronous=False)
    return Envelope(message="Wishlist cleared successfully", data=_wishlist_data(principal.id))


@router.get("/check/{product_id}", response_model=Envelope, response_model_exclude_none=True)
async def check_wishlist(product_id: str, principal: Principal = Depends(current_principal)) -> Envelope:
    wishlist = find_wishlist(principal.id)
    return Envelope(data={"is_in_wishlist": bool(wishlist and wishlist.has_item(product_id))})


@router.get("/priority/{priority}", response_model=Envelope, response_model_exclude_none=True)
async def wishlist_by_priority(priority: Priority, principal: Principal = Depends(current_principal)) -> Envelope:
    wishlist = load_wishlist(principal.id)
    items = wishlist.items_by_priority(priority)
    products = load_products(item.product_id for item in items)
    return Envelope(data={"items": [wishlist_item_view(item, products) for item in items]})


@router.post("/move-to-cart/{product_id}", response_model=Envelope, response_model_exclude_none=True)
async def move_to_cart(
    product_id: str,
    body: MoveToCartRequest | None = Body(default=None),
    principal: Principal = Depends(current_principal),
) -> Envelope:
    body = body or MoveToCartRequest()
    command = MoveWishlistItemToCart(
        customer_id=principal.id,
        product_id=product_id,
        quantity=body.quantity,
        variant=body.variant.model_dump() if body.variant else {},
    )
    current_domain.process(command, asynchronous=False)

    cart = load_cart(principal.id)
    data = _wishlist_data(principal.id)
    data["cart"] = cart_view(cart, load_products(item.product_id for item in cart.items))
    return Envelope(message="Item moved to cart successfully", data=data)


@router.get("/shared/{token}", response_model=Envelope, response_model_exclude_none=True)
async def shared_wishlist(token: str) -> Envelope:
    wishlist = find_by_share_token(token)
    if wishlist is None:
        raise ObjectNotFoundError({"token": ["Shared wishlist not found or no longer available"]})
    products = load_products(item.product_id for item in wishlist.items)
    return Envelope(data={"wishlist": wishlist_view(wishlist, products, public=True)})


@router.post("/share", response_model=Envelope, response_model_exclude_none=True)
async def share_wishlist(
    principal: Principal = Depends(current_principal),
    settings: Settings = Depends(get_settings),
) -> Envelope:
    token = current_domain.process(ShareWishlist(customer_id=principal.id), asynchronous=False)
    wishlist = load_wishlist(principal.id)
    return Envelope(
        message="Wishlist sharing enabled",
        data={"token": token, "share_url": wishlist.share_url(settings.client_url), "is_public": wishlist.is_public},
    )


@router.delete("/share", response_model=Envelope, response_model_exclude_none=True)
async def revoke_wishlist_sharing(principal: Principal = Depends(current_principal)) -> Envelope:
    current_domain.process(RevokeWishlistSharing(customer_id=principal.id), asynchronous=False)
    return Envelope(message="Wishlist sharing disabled")


@router.put("/settings", response_model=Envelope, response_model_exclude_none=True)
async def update_wishlist_settings(
    body: WishlistSettingsRequest, principal: Principal = Depends(current_principal)
) -> Envelope:
    command = UpdateWishlistSettings(customer_id=principal.id, name=body.name, description=body.description)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Wishlist settings updated successfully", data=_wishlist_data(principal.id))

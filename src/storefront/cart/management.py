"""Cart lifecycle: opening, clearing and merging a guest cart after sign-in."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.lookup import find_cart, load_cart, load_or_open_cart
from storefront.catalogue.lookup import load_product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class OpenCart:
    """Ensure the customer has a cart. Idempotent."""

    customer_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    customer_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class MergeGuestCart:
    """Fold a cart built before sign-in into the customer's cart."""

    customer_id = Identifier(required=True)
    guest_cart = Text(required=True)  # JSON: {items: [{product_id, quantity, variant}], coupon, shipping_method}


def _parse_guest_cart(raw) -> dict:
    guest_cart = json.loads(raw) if isinstance(raw, str) else raw
    if not isinstance(guest_cart, dict) or not guest_cart.get("items"):
        raise ValidationError({"guest_cart": ["Guest cart data is required"]})
    return guest_cart


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        cart = find_cart(command.customer_id)
        if cart is None:
            cart = Cart.open(command.customer_id)
            current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.customer_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        guest_cart = _parse_guest_cart(command.guest_cart)
        cart = load_or_open_cart(command.customer_id)

        skipped = []
        for entry in guest_cart["items"]:
            product_id = entry.get("product_id") or entry.get("product")
            try:
                product = load_product(product_id)
                cart.add_item(product, quantity=int(entry.get("quantity") or 1), variant=entry.get("variant"))
            except (ObjectNotFoundError, ValidationError):
                logger.info("guest_cart_item_skipped", customer_id=str(command.customer_id), product_id=product_id)
                skipped.append(str(product_id))

        coupon = guest_cart.get("coupon")
        if coupon:
            cart.apply_coupon(coupon["code"], coupon["discount"], coupon.get("type") or coupon.get("discount_type"))

        if guest_cart.get("shipping_method"):
            cart.set_shipping_method(guest_cart["shipping_method"])

        current_domain.repository_for(Cart).add(cart)
        return {"cart_id": str(cart.id), "skipped": skipped}

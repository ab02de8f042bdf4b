"""Moving a wishlist item into the cart.

Both aggregates change inside the handler's unit of work, so the item is
never lost from the wishlist without reaching the cart.
"""

from protean import handle
from protean.fields import Dict, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.lookup import load_or_open_cart
from storefront.catalogue.lookup import load_product
from storefront.domain import storefront
from storefront.wishlist.lookup import load_wishlist
from storefront.wishlist.wishlist import Wishlist


@storefront.command(part_of="Wishlist")
class MoveWishlistItemToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(min_value=1, default=1)
    variant = Dict()


@storefront.command_handler(part_of=Wishlist)
class WishlistTransferHandler:
    @handle(MoveWishlistItemToCart)
    def move_to_cart(self, command):
        wishlist = load_wishlist(command.customer_id)
        moved = wishlist.move_to_cart(command.product_id)

        product = load_product(moved["product_id"])
        cart = load_or_open_cart(command.customer_id)
        cart.add_item(product, quantity=command.quantity or 1, variant=command.variant or moved["variant"])

        current_domain.repository_for(Wishlist).add(wishlist)
        current_domain.repository_for(Cart).add(cart)
        return {"wishlist_id": str(wishlist.id), "cart_id": str(cart.id)}

"""Wishlist item management: commands and handler."""

from protean import handle
from protean.fields import Dict, Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.lookup import load_product
from storefront.domain import storefront
from storefront.wishlist.lookup import load_or_open_wishlist, load_wishlist
from storefront.wishlist.wishlist import Priority, Wishlist


@storefront.command(part_of="Wishlist")
class AddToWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    notes = String(max_length=500)
    priority = String(choices=Priority)
    variant = Dict()


@storefront.command(part_of="Wishlist")
class UpdateWishlistItem:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    notes = String(max_length=500)
    priority = String(choices=Priority)


@storefront.command(part_of="Wishlist")
class RemoveFromWishlist:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class ClearWishlist:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Wishlist)
class ManageWishlistItemsHandler:
    @handle(AddToWishlist)
    def add_to_wishlist(self, command):
        load_product(command.product_id)
        wishlist = load_or_open_wishlist(command.customer_id)
        wishlist.add_item(
            command.product_id,
            notes=command.notes,
            priority=command.priority,
            variant=command.variant or None,
        )
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

    @handle(UpdateWishlistItem)
    def update_wishlist_item(self, command):
        wishlist = load_wishlist(command.customer_id)
        wishlist.update_item(command.product_id, notes=command.notes, priority=command.priority)
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

    @handle(RemoveFromWishlist)
    def remove_from_wishlist(self, command):
        wishlist = load_wishlist(command.customer_id)
        if wishlist.remove_item(command.product_id):
            current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

    @handle(ClearWishlist)
    def clear_wishlist(self, command):
        wishlist = load_wishlist(command.customer_id)
        wishlist.clear()
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

"""Wishlist sharing and settings: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.wishlist.lookup import load_or_open_wishlist, load_wishlist
from storefront.wishlist.wishlist import Wishlist


@storefront.command(part_of="Wishlist")
class ShareWishlist:
    customer_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class RevokeWishlistSharing:
    customer_id = Identifier(required=True)


@storefront.command(part_of="Wishlist")
class UpdateWishlistSettings:
    customer_id = Identifier(required=True)
    name = String(max_length=100)
    description = String(max_length=500)


@storefront.command(part_of="Wishlist")
class OpenWishlist:
    """Ensure the customer has a wishlist. Idempotent."""

    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Wishlist)
class WishlistSharingHandler:
    @handle(OpenWishlist)
    def open_wishlist(self, command):
        wishlist = load_or_open_wishlist(command.customer_id)
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

    @handle(ShareWishlist)
    def share_wishlist(self, command):
        wishlist = load_wishlist(command.customer_id)
        token = wishlist.generate_share_token()
        current_domain.repository_for(Wishlist).add(wishlist)
        return token

    @handle(RevokeWishlistSharing)
    def revoke_sharing(self, command):
        wishlist = load_wishlist(command.customer_id)
        wishlist.revoke_share_token()
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

    @handle(UpdateWishlistSettings)
    def update_settings(self, command):
        wishlist = load_wishlist(command.customer_id)
        wishlist.update_settings(name=command.name, description=command.description)
        current_domain.repository_for(Wishlist).add(wishlist)
        return str(wishlist.id)

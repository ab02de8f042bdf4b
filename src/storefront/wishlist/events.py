"""Domain events for the Wishlist aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Wishlist")
class WishlistItemSaved:
    """A product was saved to the wishlist, or its notes/priority changed."""

    __version__ = 1

    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)
    priority = String(required=True)


@storefront.event(part_of="Wishlist")
class WishlistItemRemoved:
    __version__ = 1

    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Wishlist")
class WishlistItemMovedToCart:
    __version__ = 1

    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Wishlist")
class WishlistCleared:
    __version__ = 1

    wishlist_id = Identifier(required=True)
    item_count = Integer(required=True)


@storefront.event(part_of="Wishlist")
class WishlistShared:
    __version__ = 1

    wishlist_id = Identifier(required=True)


@storefront.event(part_of="Wishlist")
class WishlistSharingRevoked:
    __version__ = 1

    wishlist_id = Identifier(required=True)

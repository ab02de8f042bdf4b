"""Wishlist aggregate: saved products with notes and a priority.

One per customer, created on first use. A wishlist can be published
read-only through an opaque share token.
"""

import secrets
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String, ValueObject

from storefront.domain import storefront
from storefront.shared.variant import ItemVariant
from storefront.wishlist.events import (
    WishlistCleared,
    WishlistItemMovedToCart,
    WishlistItemRemoved,
    WishlistItemSaved,
    WishlistShared,
    WishlistSharingRevoked,
)

DEFAULT_NAME = "My Wishlist"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _validated_priority(priority) -> str:
    if priority not in {p.value for p in Priority}:
        raise ValidationError({"priority": ["Priority must be low, medium, or high"]})
    return priority


@storefront.entity(part_of="Wishlist")
class WishlistItem:
    product_id = Identifier(required=True)
    notes = String(max_length=500)
    priority = String(max_length=10, choices=Priority, default=Priority.MEDIUM.value)
    variant = ValueObject(ItemVariant)
    added_at = DateTime()


@storefront.aggregate
class Wishlist:
    customer_id = Identifier(required=True)
    name = String(max_length=100, default=DEFAULT_NAME)
    description = String(max_length=500)
    items = HasMany(WishlistItem)
    is_public = Boolean(default=False)
    share_token = String(max_length=64)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def products_are_unique(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the wishlist"]})

    @classmethod
    def open(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, name=DEFAULT_NAME, is_public=False, created_at=now, updated_at=now)

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    def find_item(self, product_id):
        return next((item for item in self.items if str(item.product_id) == str(product_id)), None)

    def has_item(self, product_id) -> bool:
        return self.find_item(product_id) is not None

    def add_item(self, product_id, notes=None, priority=None, variant=None):
        """Save a product. Saving it again updates its notes and priority."""
        existing = self.find_item(product_id)
        if existing:
            if notes is not None:
                existing.notes = notes
            if priority is not None:
                existing.priority = _validated_priority(priority)
            item = existing
        else:
            item = WishlistItem(
                product_id=product_id,
                notes=notes,
                priority=_validated_priority(priority or Priority.MEDIUM.value),
                variant=ItemVariant.from_dict(variant),
                added_at=datetime.now(UTC),
            )
            self.add_items(item)

        self._touch()
        self.raise_(WishlistItemSaved(wishlist_id=str(self.id), product_id=str(product_id), priority=item.priority))

    def update_item(self, product_id, notes=None, priority=None):
        item = self.find_item(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": ["Item not found in wishlist"]})

        if notes is not None:
            item.notes = notes
        if priority is not None:
            item.priority = _validated_priority(priority)

        self._touch()
        self.raise_(WishlistItemSaved(wishlist_id=str(self.id), product_id=str(product_id), priority=item.priority))

    def remove_item(self, product_id) -> bool:
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self._touch()
        self.raise_(WishlistItemRemoved(wishlist_id=str(self.id), product_id=str(product_id)))
        return True

    def clear(self):
        count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self._touch()
        self.raise_(WishlistCleared(wishlist_id=str(self.id), item_count=count))

    def items_by_priority(self, priority) -> list:
        priority = _validated_priority(priority)
        return [item for item in self.items if item.priority == priority]

    def move_to_cart(self, product_id) -> dict:
        """Remove an item and hand back what the cart needs to re-create it."""
        item = self.find_item(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": ["Item not found in wishlist"]})

        moved = {"product_id": str(item.product_id), "variant": item.variant.as_dict() if item.variant else None}
        self.remove_items(item)
        self._touch()
        self.raise_(WishlistItemMovedToCart(wishlist_id=str(self.id), product_id=str(product_id)))
        return moved

    # -------------------------------------------------------------------
    # Sharing
    # -------------------------------------------------------------------
    def generate_share_token(self) -> str:
        """Publish the wishlist and return a fresh token; any earlier token stops working."""
        self.share_token = secrets.token_urlsafe(24)
        self.is_public = True
        self._touch()
        self.raise_(WishlistShared(wishlist_id=str(self.id)))
        return self.share_token

    def revoke_share_token(self):
        self.share_token = None
        self.is_public = False
        self._touch()
        self.raise_(WishlistSharingRevoked(wishlist_id=str(self.id)))

    def share_url(self, client_url) -> str | None:
        if not self.share_token:
            return None
        return f"{client_url.rstrip('/')}/wishlist/shared/{self.share_token}"

    def update_settings(self, name=None, description=None):
        if name is not None:
            name = name.strip()
            if not 1 <= len(name) <= 100:
                raise ValidationError({"name": ["Wishlist name must be between 1 and 100 characters"]})
            self.name = name
        if description is not None:
            self.description = description
        self._touch()

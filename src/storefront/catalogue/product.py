"""Product aggregate: the catalog record carts and orders are priced against.

Products are maintained by catalog administration. The storefront only reads
them and adjusts stock at checkout and cancellation.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.catalogue.events import StockAdjusted
from storefront.domain import storefront
from storefront.exceptions import InsufficientStockError


class ProductStatus(Enum):
    ACTIVE = "active"
    DRAFT = "draft"
    ARCHIVED = "archived"


class StockDirection(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


@storefront.value_object(part_of="Product")
class Inventory:
    """Stock position; ``track_quantity`` off means unlimited supply."""

    quantity = Integer(default=0)
    track_quantity = Boolean(default=True)
    allow_backorders = Boolean(default=False)

    @property
    def enforces_floor(self) -> bool:
        return bool(self.track_quantity) and not self.allow_backorders


@storefront.entity(part_of="Product")
class ProductImage:
    url = String(required=True, max_length=500)
    alt = String(max_length=255)
    is_primary = Boolean(default=False)


@storefront.aggregate
class Product:
    name = String(required=True, max_length=200)
    description = Text()
    price = Float(required=True, min_value=0.0)
    images = HasMany(ProductImage)
    status = String(max_length=10, choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    category_id = Identifier()
    inventory = ValueObject(Inventory)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_go_negative_without_backorders(self):
        if self.inventory is not None and self.inventory.enforces_floor and (self.inventory.quantity or 0) < 0:
            raise ValidationError({"inventory": ["Quantity cannot be negative"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        quantity=0,
        track_quantity=True,
        allow_backorders=False,
        status=ProductStatus.ACTIVE.value,
        description=None,
        category_id=None,
        images=None,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            description=description,
            category_id=category_id,
            status=status,
            inventory=Inventory(
                quantity=quantity,
                track_quantity=track_quantity,
                allow_backorders=allow_backorders,
            ),
            created_at=now,
            updated_at=now,
        )
        for index, url in enumerate(images or []):
            product.add_images(ProductImage(url=url, alt=name, is_primary=index == 0))
        return product

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE.value

    @property
    def tracks_quantity(self) -> bool:
        return self.inventory is not None and bool(self.inventory.track_quantity)

    @property
    def available_quantity(self) -> int:
        return self.inventory.quantity if self.inventory is not None else 0

    @property
    def primary_image(self) -> str | None:
        primary = next((image for image in self.images if image.is_primary), None)
        if primary is None and self.images:
            primary = self.images[0]
        return primary.url if primary else None

    def can_supply(self, quantity: int) -> bool:
        """True when ``quantity`` units can be sold right now."""
        if self.inventory is None or not self.inventory.enforces_floor:
            return True
        return self.inventory.quantity >= quantity

    def update_stock(self, amount, direction):
        """Move on-hand quantity by ``amount`` in ``direction`` ("increase"/"decrease")."""
        direction = StockDirection(direction)
        if amount is None or amount < 1:
            raise ValidationError({"amount": ["Stock adjustments must be a positive quantity"]})

        inventory = self.inventory if self.inventory is not None else Inventory()
        delta = amount if direction == StockDirection.INCREASE else -amount
        new_quantity = inventory.quantity + delta

        if new_quantity < 0 and inventory.enforces_floor:
            raise InsufficientStockError(str(self.id), inventory.quantity, amount)

        self.inventory = Inventory(
            quantity=new_quantity,
            track_quantity=inventory.track_quantity,
            allow_backorders=inventory.allow_backorders,
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                direction=direction.value,
                amount=amount,
                quantity=new_quantity,
            )
        )

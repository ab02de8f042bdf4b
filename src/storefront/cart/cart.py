"""Cart aggregate: one per customer, created on first use.

The cart holds product references rather than prices; pricing is resolved
against the catalog whenever the cart is viewed and again at checkout.
A cart is never deleted, only emptied.
"""

from collections import defaultdict
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.cart.events import (
    CartCleared,
    CartCouponApplied,
    CartCouponRemoved,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartOpened,
    ShippingMethodSelected,
)
from storefront.domain import storefront
from storefront.shared.variant import ItemVariant, variant_key, variant_payload


class ShippingMethod(Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    OVERNIGHT = "overnight"


class DiscountType(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


@storefront.value_object(part_of="Cart")
class Coupon:
    code = String(required=True, max_length=50)
    discount = Float(required=True, min_value=0.0)
    discount_type = String(max_length=10, choices=DiscountType, default=DiscountType.PERCENTAGE.value)


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    variant = ValueObject(ItemVariant)
    added_at = DateTime()

    def matches(self, product_id, variant=None) -> bool:
        return str(self.product_id) == str(product_id) and variant_key(self.variant) == variant_key(variant)


@storefront.aggregate
class Cart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    coupon = ValueObject(Coupon)
    shipping_method = String(max_length=10, choices=ShippingMethod, default=ShippingMethod.STANDARD.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_and_variant_are_unique(self):
        keys = [(str(item.product_id), variant_key(item.variant)) for item in self.items]
        if len(keys) != len(set(keys)):
            raise ValidationError({"items": ["A product and variant can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, customer_id):
        now = datetime.now(UTC)
        cart = cls(
            customer_id=customer_id,
            shipping_method=ShippingMethod.STANDARD.value,
            created_at=now,
            updated_at=now,
        )
        cart.raise_(CartOpened(cart_id=str(cart.id), customer_id=str(customer_id)))
        return cart

    # -------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------
    def find_item(self, product_id, variant=None):
        return next((item for item in self.items if item.matches(product_id, variant)), None)

    def add_item(self, product, quantity=1, variant=None):
        """Add ``quantity`` of ``product``, merging into an existing line for the same variant."""
        if not product.is_active:
            raise ValidationError({"product_id": ["Product is not available"]})
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        variant = ItemVariant.from_dict(variant)
        now = datetime.now(UTC)

        existing = self.find_item(product.id, variant)
        if existing:
            existing.quantity += quantity
            line_quantity = existing.quantity
        else:
            self.add_items(CartItem(product_id=product.id, quantity=quantity, variant=variant, added_at=now))
            line_quantity = quantity

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                variant=variant_payload(variant),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_quantity(self, product_id, quantity, variant=None) -> bool:
        """Set a line's quantity; zero removes it.

        Returns False, without changing anything, when no such line exists.
        """
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity must be a non-negative integer"]})

        item = self.find_item(product_id, variant)
        if item is None:
            return False

        if quantity == 0:
            return self.remove_item(product_id, variant)

        previous = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                variant=variant_payload(item.variant),
                previous_quantity=previous,
                new_quantity=quantity,
            )
        )
        return True

    def remove_item(self, product_id, variant=None) -> bool:
        """Remove a line. Removing an absent line is a no-op that returns False."""
        item = self.find_item(product_id, variant)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
                variant=variant_payload(item.variant),
            )
        )
        return True

    def clear(self):
        """Empty items and coupon; the cart document itself survives."""
        count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.coupon = None
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), item_count=count))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Coupon and shipping
    # -------------------------------------------------------------------
    def apply_coupon(self, code, discount, discount_type=DiscountType.PERCENTAGE.value):
        # Coupon values are taken as given; there is no coupon catalogue to check against
        self.coupon = Coupon(code=code, discount=discount, discount_type=discount_type)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartCouponApplied(
                cart_id=str(self.id),
                code=code,
                discount=discount,
                discount_type=discount_type,
            )
        )

    def remove_coupon(self):
        if self.coupon is None:
            return
        code = self.coupon.code
        self.coupon = None
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCouponRemoved(cart_id=str(self.id), code=code))

    def set_shipping_method(self, shipping_method):
        if shipping_method not in {method.value for method in ShippingMethod}:
            raise ValidationError({"shipping_method": ["Invalid shipping method"]})
        self.shipping_method = shipping_method
        self.updated_at = datetime.now(UTC)
        self.raise_(ShippingMethodSelected(cart_id=str(self.id), shipping_method=self.shipping_method))

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def validate_stock(self, products) -> dict:
        """Check every line against ``products`` (product id -> Product or None).

        Demand for the same product across variants is summed before comparing
        with stock, so issues are reported once per product: a single issue can
        cover several variant lines of that product. Nothing is mutated.
        """
        issues = []
        demand = defaultdict(int)
        for item in self.items:
            demand[str(item.product_id)] += item.quantity

        for product_id, requested in demand.items():
            product = products.get(product_id)
            if product is None:
                issues.append({"product_id": product_id, "reason": "Product not found"})
            elif not product.is_active:
                issues.append({"product_id": product_id, "reason": "Product is no longer available"})
            elif not product.can_supply(requested):
                issues.append(
                    {
                        "product_id": product_id,
                        "reason": f"Only {product.available_quantity} items available",
                    }
                )

        return {"is_valid": not issues, "issues": issues}

"""Domain events for the Cart aggregate."""

from protean.fields import Dict, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartOpened:
    """A customer's cart was created on first use."""

    __version__ = 1

    cart_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its existing line was increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant = Dict()
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant = Dict()
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant = Dict()


@storefront.event(part_of="Cart")
class CartCouponApplied:
    __version__ = 1

    cart_id = Identifier(required=True)
    code = String(required=True)
    discount = Float(required=True)
    discount_type = String(required=True)


@storefront.event(part_of="Cart")
class CartCouponRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    code = String(required=True)


@storefront.event(part_of="Cart")
class ShippingMethodSelected:
    __version__ = 1

    cart_id = Identifier(required=True)
    shipping_method = String(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """All items and the coupon were removed; the cart itself remains."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_count = Integer(required=True)

"""Pricing rules shared by the cart view and checkout.

Amounts are floats rounded to cents at each published figure, so the
totals a customer sees in the cart are the totals the order records.
"""

from protean.exceptions import ValidationError

TAX_RATE = 0.08

SHIPPING_RATES = {
    "standard": 5.99,
    "express": 12.99,
    "overnight": 24.99,
}

# Days until delivery, by shipping method
DELIVERY_DAYS = {
    "standard": 7,
    "express": 3,
    "overnight": 1,
}


def to_cents(amount) -> float:
    return round(float(amount), 2)


def unit_price(base_price, variant=None) -> float:
    adjustment = 0.0
    if variant is not None:
        adjustment = (variant.get("price_adjustment") if isinstance(variant, dict) else variant.price_adjustment) or 0.0
    return float(base_price) + float(adjustment)


def line_total(base_price, quantity, variant=None) -> float:
    """(base price + variant adjustment) x quantity."""
    return to_cents(unit_price(base_price, variant) * quantity)


def shipping_cost(shipping_method) -> float:
    if shipping_method not in SHIPPING_RATES:
        raise ValidationError({"shipping_method": ["Invalid shipping method"]})
    return SHIPPING_RATES[shipping_method]


def tax_for(subtotal) -> float:
    return to_cents(subtotal * TAX_RATE)


def coupon_discount(subtotal, coupon) -> float:
    """Percentage coupons take a share of the subtotal; fixed coupons a flat amount.

    The discount never exceeds the subtotal.
    """
    if coupon is None:
        return 0.0

    if isinstance(coupon, dict):
        discount, discount_type = coupon.get("discount") or 0.0, coupon.get("discount_type") or coupon.get("type")
    else:
        discount, discount_type = coupon.discount or 0.0, coupon.discount_type

    if discount_type == "percentage":
        amount = subtotal * discount / 100
    else:
        amount = discount
    return to_cents(min(max(amount, 0.0), subtotal))


def price_order(line_totals, shipping_method, coupon=None) -> dict:
    """Full breakdown for a set of line totals.

    ``total == subtotal + tax + shipping_cost - discount`` holds exactly on
    the rounded figures.
    """
    subtotal = to_cents(sum(line_totals))
    tax = tax_for(subtotal)
    shipping = shipping_cost(shipping_method)
    discount = coupon_discount(subtotal, coupon)
    return {
        "subtotal": subtotal,
        "tax": tax,
        "shipping_cost": shipping,
        "discount": discount,
        "total": to_cents(subtotal + tax + shipping - discount),
    }

"""Cart coupons: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, DiscountType
from storefront.cart.lookup import load_cart
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class ApplyCoupon:
    customer_id = Identifier(required=True)
    code = String(required=True, max_length=50)
    discount = Float(required=True, min_value=0.0)
    discount_type = String(required=True, choices=DiscountType)


@storefront.command(part_of="Cart")
class RemoveCoupon:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class CartCouponHandler:
    @handle(ApplyCoupon)
    def apply_coupon(self, command):
        cart = load_cart(command.customer_id)
        cart.apply_coupon(command.code.strip(), command.discount, command.discount_type)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveCoupon)
    def remove_coupon(self, command):
        cart = load_cart(command.customer_id)
        cart.remove_coupon()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

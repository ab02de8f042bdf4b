from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, ShippingMethod
from storefront.cart.lookup import load_cart
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class SelectShippingMethod:
    customer_id = Identifier(required=True)
    shipping_method = String(required=True, choices=ShippingMethod)


@storefront.command_handler(part_of=Cart)
class CartShippingHandler:
    @handle(SelectShippingMethod)
    def select_shipping_method(self, command):
        cart = load_cart(command.customer_id)
        cart.set_shipping_method(command.shipping_method)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

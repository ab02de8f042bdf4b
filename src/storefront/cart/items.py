"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Dict, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.lookup import load_cart, load_or_open_cart
from storefront.catalogue.lookup import load_product
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    variant = Dict()


@storefront.command(part_of="Cart")
class UpdateCartItemQuantity:
    """Set the quantity of a line; zero removes it."""

    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)
    variant = Dict()


@storefront.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    variant = Dict()


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = load_product(command.product_id)
        cart = load_or_open_cart(command.customer_id)
        cart.add_item(product, quantity=command.quantity, variant=command.variant or None)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(UpdateCartItemQuantity)
    def update_quantity(self, command):
        cart = load_cart(command.customer_id)
        if not cart.update_quantity(command.product_id, command.quantity, variant=command.variant or None):
            raise ObjectNotFoundError({"product_id": ["Item not found in cart"]})
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.customer_id)
        if cart.remove_item(command.product_id, variant=command.variant or None):
            current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

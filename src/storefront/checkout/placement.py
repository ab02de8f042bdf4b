"""Checkout: turn the customer's cart into an order.

Everything below runs inside the command handler's unit of work: the order,
every stock decrement and the emptied cart are committed together or not at
all. Products are read once per attempt and written back with the version
they were read at. When a concurrent checkout commits first, the write fails
with ``ExpectedVersionError``; Protean retries the handler on fresh data, where
the stock check sees the units already sold, and a conflict that outlasts the
retries reaches the client as 409.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Dict, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart, ShippingMethod
from storefront.cart.lookup import find_cart
from storefront.catalogue.lookup import load_products
from storefront.catalogue.product import Product, StockDirection
from storefront.checkout.pricing import line_total
from storefront.domain import storefront
from storefront.exceptions import StockValidationError
from storefront.order.order import Address, Order, OrderItem, PaymentInfo
from storefront.shared.variant import ItemVariant

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=200)
    shipping_address = Dict(required=True)
    billing_address = Dict()
    payment_info = Dict(required=True)
    shipping_method = String(choices=ShippingMethod)
    notes = Text()
    is_gift = Boolean(default=False)
    gift_message = String(max_length=500)
    gift_wrap = Boolean(default=False)


def snapshot_items(cart, products) -> list:
    """Freeze each cart line with the product's current name, image and price."""
    snapshots = []
    for item in cart.items:
        product = products[str(item.product_id)]
        variant = ItemVariant.from_dict(item.variant.as_dict()) if item.variant else None
        snapshots.append(
            OrderItem(
                product_id=str(product.id),
                name=product.name,
                image=product.primary_image,
                price=product.price,
                quantity=item.quantity,
                variant=variant,
                total_price=line_total(product.price, item.quantity, variant),
            )
        )
    return snapshots


def decrement_stock(cart, products) -> None:
    repo = current_domain.repository_for(Product)
    touched = set()
    for item in cart.items:
        product = products[str(item.product_id)]
        if not product.tracks_quantity:
            continue
        product.update_stock(item.quantity, StockDirection.DECREASE.value)
        touched.add(str(product.id))

    for product_id in touched:
        repo.add(products[product_id])


def _address(data, field_name):
    try:
        return Address(**data)
    except ValidationError as exc:
        raise ValidationError({f"{field_name}.{key}": value for key, value in exc.messages.items()}) from None


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart = find_cart(command.customer_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})

        products = load_products(item.product_id for item in cart.items)
        report = cart.validate_stock(products)
        if not report["is_valid"]:
            raise StockValidationError(report["issues"])

        shipping_address = _address(command.shipping_address, "shipping_address")
        billing_address = _address(command.billing_address, "billing_address") if command.billing_address else None

        order = Order.place(
            customer_id=command.customer_id,
            items=snapshot_items(cart, products),
            shipping_address=shipping_address,
            billing_address=billing_address,
            shipping_method=command.shipping_method or cart.shipping_method,
            payment_info=PaymentInfo(**command.payment_info),
            coupon=cart.coupon,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            notes=command.notes,
            is_gift=command.is_gift,
            gift_message=command.gift_message,
            gift_wrap=command.gift_wrap,
        )
        current_domain.repository_for(Order).add(order)

        decrement_stock(cart, products)

        cart.clear()
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            customer_id=str(command.customer_id),
            total=order.pricing.total,
        )
        return str(order.id)

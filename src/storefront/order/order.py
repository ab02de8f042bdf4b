"""Order aggregate: an immutable snapshot of a checked-out cart plus its status.

Line items capture product name, image and price at checkout; later catalog
edits never change a placed order. After placement only the status, the
tracking number and admin notes move.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import uuid4

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.checkout.pricing import DELIVERY_DAYS, price_order
from storefront.domain import storefront
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.shared.variant import ItemVariant


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"


class PaymentMethod(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    APPLE_PAY = "apple_pay"
    GOOGLE_PAY = "google_pay"
    BANK_TRANSFER = "bank_transfer"


_CANCELLABLE_STATES = {
    OrderStatus.PENDING.value,
    OrderStatus.CONFIRMED.value,
    OrderStatus.PROCESSING.value,
}


@storefront.value_object(part_of="Order")
class Address:
    first_name = String(required=True, max_length=100)
    last_name = String(required=True, max_length=100)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@storefront.value_object(part_of="Order")
class PaymentInfo:
    method = String(required=True, choices=PaymentMethod)
    transaction_id = String(max_length=255)
    last_four = String(max_length=4)
    brand = String(max_length=50)


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Money summary locked at checkout."""

    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    discount = Float(default=0.0)
    total = Float(default=0.0)
    currency = String(max_length=3, default="USD")


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=200)
    image = String(max_length=500)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    variant = ValueObject(ItemVariant)
    total_price = Float(required=True, min_value=0.0)


def generate_order_number(now=None) -> str:
    now = now or datetime.now(UTC)
    return f"ORD-{now:%Y%m%d}-{uuid4().hex[:6].upper()}"


@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=30, unique=True)
    customer_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=200)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(Address)
    billing_address = ValueObject(Address)
    payment_info = ValueObject(PaymentInfo)
    shipping_method = String(max_length=10, default="standard")
    pricing = ValueObject(OrderPricing)
    coupon_code = String(max_length=50)
    status = String(max_length=12, choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number = String(max_length=255)
    estimated_delivery = DateTime()
    notes = Text()
    is_gift = Boolean(default=False)
    gift_message = String(max_length=500)
    gift_wrap = Boolean(default=False)
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_equal_its_components(self):
        if not self.pricing:
            return
        p = self.pricing
        expected = p.subtotal + p.tax + p.shipping_cost - p.discount
        if abs(p.total - expected) > 0.005:
            raise ValidationError({"pricing": ["Total must equal subtotal + tax + shipping - discount"]})

    @invariant.post
    def tracking_number_requires_shipment(self):
        if self.tracking_number and self.status not in (
            OrderStatus.SHIPPED.value,
            OrderStatus.DELIVERED.value,
            OrderStatus.RETURNED.value,
        ):
            raise ValidationError({"tracking_number": ["Tracking number is only recorded for shipped orders"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        items,
        shipping_address,
        shipping_method,
        payment_info,
        billing_address=None,
        coupon=None,
        customer_email=None,
        customer_name=None,
        notes=None,
        is_gift=False,
        gift_message=None,
        gift_wrap=False,
    ):
        """Create a pending order from line snapshots.

        ``items`` are OrderItem instances; ``coupon`` is the cart's coupon
        (or None).
        """
        if not items:
            raise ValidationError({"items": ["Cart is empty"]})

        now = datetime.now(UTC)
        breakdown = price_order([item.total_price for item in items], shipping_method, coupon)

        order = cls(
            order_number=generate_order_number(now),
            customer_id=customer_id,
            customer_email=customer_email,
            customer_name=customer_name,
            shipping_address=shipping_address,
            billing_address=billing_address or shipping_address,
            payment_info=payment_info,
            shipping_method=shipping_method,
            pricing=OrderPricing(**breakdown),
            coupon_code=coupon.code if coupon else None,
            status=OrderStatus.PENDING.value,
            estimated_delivery=now + timedelta(days=DELIVERY_DAYS[shipping_method]),
            notes=notes,
            is_gift=bool(is_gift),
            gift_message=gift_message if is_gift else None,
            gift_wrap=bool(gift_wrap),
            created_at=now,
            updated_at=now,
        )
        for item in items:
            order.add_items(item)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                item_count=sum(item.quantity for item in items),
                total=order.pricing.total,
                currency=order.pricing.currency,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def can_be_cancelled(self) -> bool:
        return self.status in _CANCELLABLE_STATES

    def is_owned_by(self, customer_id) -> bool:
        return str(self.customer_id) == str(customer_id)

    def update_status(self, new_status, tracking_number=None, notes=None):
        """Move to any listed status.

        There is no transition table: administrators may correct a status in
        either direction. Only cancellation is guarded.
        """
        if new_status not in {status.value for status in OrderStatus}:
            raise ValidationError({"status": ["Invalid order status"]})
        if new_status == OrderStatus.CANCELLED.value:
            self.cancel()
            return
        if tracking_number and new_status != OrderStatus.SHIPPED.value:
            raise ValidationError({"tracking_number": ["Tracking number can only be set when shipping an order"]})

        previous = self.status
        now = datetime.now(UTC)
        with atomic_change(self):
            self.status = new_status
            if tracking_number:
                self.tracking_number = tracking_number
            elif new_status in _CANCELLABLE_STATES:
                # Moved back before shipment
                self.tracking_number = None
            if notes:
                self.notes = notes
            self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
                tracking_number=tracking_number,
                changed_at=now,
            )
        )

    def cancel(self, cancelled_by=None):
        if not self.can_be_cancelled():
            raise ValidationError({"status": ["Order cannot be cancelled at this stage"]})

        previous = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=previous,
                cancelled_by=str(cancelled_by) if cancelled_by else None,
                cancelled_at=now,
            )
        )

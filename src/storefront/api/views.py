"""Read models returned inside the response envelope.

Cart and wishlist lines are joined with live catalog data here; orders are
rendered purely from their own snapshot.
"""

from storefront.checkout.pricing import line_total, price_order, unit_price
from storefront.shared.variant import variant_payload


def _iso(value):
    return value.isoformat() if value else None


def product_summary(product) -> dict | None:
    if product is None:
        return None
    inventory = product.inventory
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "image": product.primary_image,
        "status": product.status,
        "category_id": str(product.category_id) if product.category_id else None,
        "inventory": {
            "quantity": inventory.quantity if inventory else 0,
            "track_quantity": bool(inventory and inventory.track_quantity),
            "allow_backorders": bool(inventory and inventory.allow_backorders),
        },
    }


def cart_view(cart, products: dict) -> dict:
    """Cart with each line priced against the current catalog.

    Lines whose product has disappeared are shown but do not count towards
    the totals.
    """
    lines = []
    totals = []
    for item in cart.items:
        product = products.get(str(item.product_id))
        line = {
            "product_id": str(item.product_id),
            "product": product_summary(product),
            "quantity": item.quantity,
            "variant": variant_payload(item.variant) or None,
            "added_at": _iso(item.added_at),
            "unit_price": None,
            "total_price": None,
        }
        if product is not None:
            line["unit_price"] = round(unit_price(product.price, item.variant), 2)
            line["total_price"] = line_total(product.price, item.quantity, item.variant)
            totals.append(line["total_price"])
        lines.append(line)

    coupon = cart.coupon
    return {
        "id": str(cart.id),
        "customer_id": str(cart.customer_id),
        "items": lines,
        "item_count": cart.item_count,
        "coupon": (
            {"code": coupon.code, "discount": coupon.discount, "type": coupon.discount_type} if coupon else None
        ),
        "shipping_method": cart.shipping_method,
        "pricing": price_order(totals, cart.shipping_method, coupon),
        "updated_at": _iso(cart.updated_at),
    }


def wishlist_item_view(item, products: dict) -> dict:
    return {
        "product_id": str(item.product_id),
        "product": product_summary(products.get(str(item.product_id))),
        "notes": item.notes,
        "priority": item.priority,
        "variant": variant_payload(item.variant) or None,
        "added_at": _iso(item.added_at),
    }


def wishlist_view(wishlist, products: dict, public: bool = False) -> dict:
    """Owner view by default; ``public`` hides the customer id and share token."""
    view = {
        "id": str(wishlist.id),
        "name": wishlist.name,
        "description": wishlist.description,
        "is_public": bool(wishlist.is_public),
        "items": [wishlist_item_view(item, products) for item in wishlist.items],
        "item_count": len(wishlist.items),
        "updated_at": _iso(wishlist.updated_at),
    }
    if not public:
        view["customer_id"] = str(wishlist.customer_id)
        view["share_token"] = wishlist.share_token
    return view


def _address(address) -> dict | None:
    if address is None:
        return None
    return {
        "first_name": address.first_name,
        "last_name": address.last_name,
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "postal_code": address.postal_code,
        "country": address.country,
        "phone": address.phone,
    }


def order_view(order) -> dict:
    pricing = order.pricing
    payment = order.payment_info
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "customer_id": str(order.customer_id),
        "customer_email": order.customer_email,
        "customer_name": order.customer_name,
        "status": order.status,
        "can_be_cancelled": order.can_be_cancelled(),
        "items": [
            {
                "product_id": str(item.product_id),
                "name": item.name,
                "image": item.image,
                "price": item.price,
                "quantity": item.quantity,
                "variant": variant_payload(item.variant) or None,
                "total_price": item.total_price,
            }
            for item in order.items
        ],
        "shipping_address": _address(order.shipping_address),
        "billing_address": _address(order.billing_address),
        "payment_info": (
            {
                "method": payment.method,
                "transaction_id": payment.transaction_id,
                "last_four": payment.last_four,
                "brand": payment.brand,
            }
            if payment
            else None
        ),
        "shipping_method": order.shipping_method,
        "subtotal": pricing.subtotal,
        "tax": pricing.tax,
        "shipping_cost": pricing.shipping_cost,
        "discount": pricing.discount,
        "total": pricing.total,
        "currency": pricing.currency,
        "coupon_code": order.coupon_code,
        "tracking_number": order.tracking_number,
        "estimated_delivery": _iso(order.estimated_delivery),
        "notes": order.notes,
        "is_gift": bool(order.is_gift),
        "gift_message": order.gift_message,
        "gift_wrap": bool(order.gift_wrap),
        "cancelled_at": _iso(order.cancelled_at),
        "created_at": _iso(order.created_at),
        "updated_at": _iso(order.updated_at),
    }


def pagination(page: int, limit: int, total: int) -> dict:
    return {"page": page, "limit": limit, "total": total, "pages": -(-total // limit) if limit else 0}

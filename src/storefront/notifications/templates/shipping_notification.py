"""Shipping notification: sent when an order ships with a tracking number."""

DEFAULT_CARRIER = "FedEx"


class ShippingNotificationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "subject": f"Your Order Has Shipped - {order_number}",
            "body": (
                f"Hi {context.get('first_name') or 'there'},\n\n"
                f"Good news! Order #{order_number} is on its way.\n\n"
                f"Carrier: {context.get('carrier') or DEFAULT_CARRIER}\n"
                f"Tracking Number: {context.get('tracking_number', 'N/A')}"
            ),
        }

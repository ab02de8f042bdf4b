"""Order confirmation: sent once checkout commits."""


class OrderConfirmationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "subject": f"Order Confirmation - {order_number}",
            "body": (
                f"Hi {context.get('first_name') or 'there'},\n\n"
                f"Thank you for your order #{order_number}.\n\n"
                f"Order Total: {context.get('currency', 'USD')} {context.get('total', '0.00')}\n"
                f"Estimated Delivery: {context.get('estimated_delivery') or 'TBD'}\n\n"
                "We'll let you know as soon as it ships."
            ),
        }

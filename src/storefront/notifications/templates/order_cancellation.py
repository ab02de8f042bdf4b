class OrderCancellationTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "subject": f"Order Cancelled - {order_number}",
            "body": (
                f"Hi {context.get('first_name') or 'there'},\n\n"
                f"Your order #{order_number} has been cancelled.\n"
                "If you paid already, the amount will be returned to your original payment method."
            ),
        }

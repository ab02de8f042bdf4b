"""Notification sender: renders a named template and hands it to the email channel.

Delivery is best effort. A failed send is logged and reported as False;
it never interrupts the operation that triggered it.
"""

import structlog

from storefront.config import MailSettings
from storefront.exceptions import ExternalServiceError
from storefront.notifications.channel import DeliveryReceipt, EmailPort, OutgoingEmail, build_email_channel
from storefront.notifications.templates import NotificationTemplate, render

logger = structlog.get_logger(__name__)


class NotificationSender:
    def __init__(self, settings: MailSettings | None = None, channel: EmailPort | None = None):
        self.settings = settings or MailSettings()
        self.channel = channel or build_email_channel(self.settings)

    def _deliver(self, to: str, content: dict) -> DeliveryReceipt:
        email = OutgoingEmail(to=to, **content)
        try:
            receipt = self.channel.deliver(email)
        except Exception as exc:
            raise ExternalServiceError(str(exc)) from exc

        if not receipt.delivered:
            raise ExternalServiceError(receipt.error or "Email delivery failed")
        return receipt

    def send(self, template: NotificationTemplate, to: str | None, context: dict) -> bool:
        if not to:
            logger.warning("notification_skipped_no_recipient", template=NotificationTemplate(template).value)
            return False

        try:
            result = self._deliver(to, render(template, context))
        except ExternalServiceError as exc:
            logger.error(
                "notification_failed",
                template=NotificationTemplate(template).value,
                to=to,
                error=exc.message,
            )
            return False

        logger.info(
            "notification_sent",
            template=NotificationTemplate(template).value,
            to=to,
            message_id=result.message_id,
        )
        return True

    def order_confirmation(self, order) -> bool:
        return self.send(
            NotificationTemplate.ORDER_CONFIRMATION,
            order.customer_email,
            {
                "first_name": _first_name(order.customer_name),
                "order_number": order.order_number,
                "total": f"{order.pricing.total:.2f}",
                "currency": order.pricing.currency,
                "estimated_delivery": order.estimated_delivery.strftime("%a %b %d %Y") if order.estimated_delivery else None,
            },
        )

    def shipping_notification(self, order) -> bool:
        return self.send(
            NotificationTemplate.SHIPPING_NOTIFICATION,
            order.customer_email,
            {
                "first_name": _first_name(order.customer_name),
                "order_number": order.order_number,
                "tracking_number": order.tracking_number,
            },
        )

    def order_cancellation(self, order) -> bool:
        return self.send(
            NotificationTemplate.ORDER_CANCELLATION,
            order.customer_email,
            {"first_name": _first_name(order.customer_name), "order_number": order.order_number},
        )


def _first_name(full_name):
    return full_name.split()[0] if full_name else None

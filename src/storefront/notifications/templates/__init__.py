"""The closed set of e-mails the storefront sends."""

from enum import Enum

from storefront.notifications.templates.order_cancellation import OrderCancellationTemplate
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.shipping_notification import ShippingNotificationTemplate


class NotificationTemplate(Enum):
    ORDER_CONFIRMATION = "order-confirmation"
    SHIPPING_NOTIFICATION = "shipping-notification"
    ORDER_CANCELLATION = "order-cancellation"


TEMPLATE_REGISTRY: dict[NotificationTemplate, type] = {
    NotificationTemplate.ORDER_CONFIRMATION: OrderConfirmationTemplate,
    NotificationTemplate.SHIPPING_NOTIFICATION: ShippingNotificationTemplate,
    NotificationTemplate.ORDER_CANCELLATION: OrderCancellationTemplate,
}


def render(template: NotificationTemplate, context: dict) -> dict:
    return TEMPLATE_REGISTRY[NotificationTemplate(template)].render(context)

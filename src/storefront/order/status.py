"""Administrative status updates: command and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.cancellation import cancel_and_restock
from storefront.order.lookup import load_order
from storefront.order.order import Order, OrderStatus


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)
    tracking_number = String(max_length=255)
    notes = Text()
    updated_by = Identifier()


@storefront.command_handler(part_of=Order)
class OrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        order = load_order(command.order_id)

        if command.status == OrderStatus.CANCELLED.value:
            # Same path as a customer cancellation so stock comes back
            cancel_and_restock(order, cancelled_by=command.updated_by)
            if command.notes:
                order.notes = command.notes
                current_domain.repository_for(Order).add(order)
            return str(order.id)

        order.update_status(command.status, tracking_number=command.tracking_number, notes=command.notes)
        current_domain.repository_for(Order).add(order)
        return str(order.id)

"""Order cancellation: command, handler and stock restoration."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product, StockDirection
from storefront.domain import storefront
from storefront.exceptions import AuthorizationError
from storefront.order.lookup import load_order
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    requester_role = String(max_length=20, default="customer")


def restore_stock(order) -> list[str]:
    """Put every line's quantity back on its product.

    Products that were deleted or no longer track quantity are skipped.
    Returns the ids of products that were restocked.
    """
    repo = current_domain.repository_for(Product)
    products = {}
    for item in order.items:
        product_id = str(item.product_id)
        if product_id not in products:
            try:
                products[product_id] = repo.get(product_id)
            except ObjectNotFoundError:
                products[product_id] = None

        product = products[product_id]
        if product is None or not product.tracks_quantity:
            logger.info("stock_restore_skipped", order_id=str(order.id), product_id=product_id)
            continue
        product.update_stock(item.quantity, StockDirection.INCREASE.value)

    restocked = [pid for pid, product in products.items() if product is not None and product.tracks_quantity]
    for product_id in restocked:
        repo.add(products[product_id])
    return restocked


def cancel_and_restock(order, cancelled_by=None) -> None:
    order.cancel(cancelled_by=cancelled_by)
    restocked = restore_stock(order)
    current_domain.repository_for(Order).add(order)
    logger.info("order_cancelled", order_id=str(order.id), restocked=len(restocked))


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        if not order.is_owned_by(command.requested_by) and command.requester_role != "admin":
            raise AuthorizationError("Not authorized to cancel this order")

        cancel_and_restock(order, cancelled_by=command.requested_by)
        return str(order.id)

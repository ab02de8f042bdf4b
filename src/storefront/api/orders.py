"""FastAPI routes for checkout and orders.

E-mails are queued as background tasks that run after the response is sent,
so a slow mail relay never holds up the request. A failed send is logged by
the notifier and never changes the response.
"""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal, get_notifier, require_admin
from storefront.api.schemas import Envelope, PlaceOrderRequest, UpdateOrderStatusRequest
from storefront.api.views import order_view, pagination
from storefront.auth.tokens import Principal
from storefront.checkout.placement import PlaceOrder
from storefront.exceptions import AuthorizationError
from storefront.notifications.sender import NotificationSender
from storefront.order.cancellation import CancelOrder
from storefront.order.lookup import load_order, search_orders
from storefront.order.order import OrderStatus
from storefront.order.status import UpdateOrderStatus

router = APIRouter(prefix="/api/orders", tags=["orders"])

StatusFilter = Annotated[str | None, Query(pattern="^(pending|confirmed|processing|shipped|delivered|cancelled|returned)$")]


@router.post("", status_code=201, response_model=Envelope, response_model_exclude_none=True)
async def place_order(
    body: PlaceOrderRequest,
    background: BackgroundTasks,
    principal: Principal = Depends(current_principal),
    notifier: NotificationSender = Depends(get_notifier),
) -> Envelope:
    command = PlaceOrder(
        customer_id=principal.id,
        customer_email=principal.email,
        customer_name=principal.name,
        shipping_address=body.shipping_address.model_dump(),
        billing_address=body.billing_address.model_dump() if body.billing_address else {},
        payment_info=body.payment_info.model_dump(),
        shipping_method=body.shipping_method,
        notes=body.notes,
        is_gift=body.is_gift,
        gift_message=body.gift_message,
        gift_wrap=body.gift_wrap,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = load_order(order_id)

    background.add_task(notifier.order_confirmation, order)
    return Envelope(message="Order created successfully", data={"order": order_view(order)})


@router.get("", response_model=Envelope, response_model_exclude_none=True)
async def list_my_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    status: StatusFilter = None,
    principal: Principal = Depends(current_principal),
) -> Envelope:
    orders, total = search_orders(customer_id=principal.id, status=status, page=page, limit=limit)
    return Envelope(data={"orders": [order_view(o) for o in orders], "pagination": pagination(page, limit, total)})


# Declared before /{order_id} so "admin" is not read as an order id
@router.get("/admin/all", response_model=Envelope, response_model_exclude_none=True)
async def list_all_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    status: StatusFilter = None,
    search: str | None = Query(default=None, max_length=100),
    admin: Principal = Depends(require_admin),
) -> Envelope:
    orders, total = search_orders(status=status, search=search, page=page, limit=limit)
    return Envelope(data={"orders": [order_view(o) for o in orders], "pagination": pagination(page, limit, total)})


@router.get("/{order_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> Envelope:
    order = load_order(order_id)
    if not order.is_owned_by(principal.id) and not principal.is_admin:
        raise AuthorizationError("Not authorized to view this order")
    return Envelope(data={"order": order_view(order)})


@router.put("/{order_id}/status", response_model=Envelope, response_model_exclude_none=True)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    background: BackgroundTasks,
    admin: Principal = Depends(require_admin),
    notifier: NotificationSender = Depends(get_notifier),
) -> Envelope:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
        notes=body.notes,
        updated_by=admin.id,
    )
    current_domain.process(command, asynchronous=False)
    order = load_order(order_id)

    if body.status == OrderStatus.SHIPPED.value and body.tracking_number:
        background.add_task(notifier.shipping_notification, order)
    elif body.status == OrderStatus.CANCELLED.value:
        background.add_task(notifier.order_cancellation, order)

    return Envelope(message="Order status updated successfully", data={"order": order_view(order)})


@router.put("/{order_id}/cancel", response_model=Envelope, response_model_exclude_none=True)
async def cancel_order(
    order_id: str,
    background: BackgroundTasks,
    principal: Principal = Depends(current_principal),
    notifier: NotificationSender = Depends(get_notifier),
) -> Envelope:
    command = CancelOrder(order_id=order_id, requested_by=principal.id, requester_role=principal.role)
    current_domain.process(command, asynchronous=False)
    order = load_order(order_id)

    background.add_task(notifier.order_cancellation, order)
    return Envelope(message="Order cancelled successfully", data={"order": order_view(order)})

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.query import Q

from storefront.order.order import Order


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"order": ["Order not found"]}) from None


def search_orders(customer_id=None, status=None, search=None, page=1, limit=10) -> tuple[list, int]:
    """Newest-first page of orders and the total number matching the filters."""
    repo = current_domain.repository_for(Order)
    filters = {}
    if customer_id:
        filters["customer_id"] = str(customer_id)
    if status:
        filters["status"] = status

    query = repo._dao.query.filter(**filters) if filters else repo._dao.query
    if search:
        query = query.filter(
            Q(order_number__icontains=search) | Q(customer_email__icontains=search) | Q(customer_name__icontains=search)
        )

    result = query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()
    return [repo.get(record.id) for record in result.items], result.total

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart


def find_cart(customer_id) -> Cart | None:
    repo = current_domain.repository_for(Cart)
    carts = repo._dao.query.filter(customer_id=str(customer_id)).all().items
    return repo.get(carts[0].id) if carts else None


def load_cart(customer_id) -> Cart:
    cart = find_cart(customer_id)
    if cart is None:
        raise ObjectNotFoundError({"cart": ["Cart not found"]})
    return cart


def load_or_open_cart(customer_id) -> Cart:
    return find_cart(customer_id) or Cart.open(customer_id)

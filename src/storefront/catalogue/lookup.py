from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def load_product(product_id) -> Product:
    """Fetch a product or raise ``ObjectNotFoundError`` with a client-facing message."""
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"product_id": ["Product not found"]}) from None


def load_products(product_ids) -> dict:
    """Map each id to its Product, or to None when the product no longer exists."""
    repo = current_domain.repository_for(Product)
    products = {}
    for product_id in {str(pid) for pid in product_ids}:
        try:
            products[product_id] = repo.get(product_id)
        except ObjectNotFoundError:
            products[product_id] = None
    return products

"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class StockAdjusted:
    """On-hand quantity of a product changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    direction = String(required=True)
    amount = Integer(required=True)
    quantity = Integer(required=True)

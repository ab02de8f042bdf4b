"""Product variant selection shared by cart, wishlist and order lines."""

from protean.fields import Float, String

from storefront.domain import storefront


@storefront.value_object
class ItemVariant:
    """A chosen option such as ``size: L``, with its price delta."""

    name = String(required=True, max_length=50)
    value = String(required=True, max_length=100)
    price_adjustment = Float(default=0.0)

    @classmethod
    def from_dict(cls, data):
        if not data:
            return None
        if isinstance(data, ItemVariant):
            return data
        return cls(
            name=data.get("name"),
            value=data.get("value"),
            price_adjustment=data.get("price_adjustment") or data.get("priceAdjustment") or 0.0,
        )

    def as_dict(self) -> dict:
        return {"name": self.name, "value": self.value, "price_adjustment": self.price_adjustment or 0.0}


def variant_key(variant) -> tuple | None:
    """Identity of a variant for line matching; price deltas do not distinguish lines."""
    if variant is None:
        return None
    if isinstance(variant, dict):
        return (variant.get("name"), variant.get("value")) if variant else None
    return (variant.name, variant.value)


def variant_payload(variant) -> dict:
    """Plain dict for messages and views; an empty dict means no variant."""
    return variant.as_dict() if variant is not None else {}

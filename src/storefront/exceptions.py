"""Application errors that sit alongside Protean's own.

Invalid input and missing records use ``protean.exceptions.ValidationError``
and ``ObjectNotFoundError``; the classes here cover the remaining outcomes
the HTTP layer distinguishes.
"""


class StorefrontError(Exception):
    """Base class carrying a human-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(StorefrontError):
    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message)


class AuthorizationError(StorefrontError):
    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message)


class ConflictError(StorefrontError):
    pass


class InsufficientStockError(ConflictError):
    def __init__(self, product_id: str, available: int, requested: int):
        super().__init__(f"Insufficient stock for product {product_id}: {available} available, {requested} requested")
        self.product_id = product_id
        self.available = available
        self.requested = requested


class StockValidationError(StorefrontError):
    """Checkout aborted because one or more cart lines cannot be fulfilled."""

    def __init__(self, issues: list[dict]):
        super().__init__("Some items in your cart are unavailable")
        self.issues = issues


class ExternalServiceError(StorefrontError):
    """A downstream service (e-mail) failed. Never surfaced to clients."""

"""Domain initialization and configuration.

Products, carts, wishlists and orders share a single domain so that
checkout, cancellation and move-to-cart commit in one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

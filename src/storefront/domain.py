"""Storefront bounded context: catalogue, shopping cart, checkout and orders.

Carts are keyed by an anonymous client session token. Orders are created only
when the payment provider confirms a hosted checkout session.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

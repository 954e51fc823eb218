"""Storefront bounded context: products, carts and orders.

Handles the product inventory, per-customer shopping carts, and the checkout
flow that converts a cart into an order while decrementing stock.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

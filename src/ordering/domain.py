"""Ordering bounded context: Cart, Checkout and Orders.

Holds the buyer's cart and its local persistence, the checkout workflow that
turns a cart into a captured payment, and the order records sellers work from.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger
from shared.settings import get_settings

configure_logging(log_dir=get_settings().log_dir)

logger = get_logger(__name__)

ordering = Domain(name="ordering")

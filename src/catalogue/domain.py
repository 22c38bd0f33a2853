"""Catalogue bounded context: Sellers and Products.

Sellers register a store; products are listed under that store with their
images held in object storage. Buyers browse the catalogue through a paginated
listing and a change feed that republishes the product list on every change.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger
from shared.settings import get_settings

configure_logging(log_dir=get_settings().log_dir)

logger = get_logger(__name__)

catalogue = Domain(name="catalogue")

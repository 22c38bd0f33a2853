"""Resolve a product id into the snapshot a cart line is priced from.

The cart never trusts a caller's copy of a product: name, price, discount
and seller come from the catalogue's current record.
"""

import structlog
from catalogue.domain import catalogue
from catalogue.product.listing import product_view
from catalogue.product.product import Product
from protean.utils.globals import current_domain

from ordering.cart.products import ProductSnapshot

logger = structlog.get_logger(__name__)


def product_snapshot(product_id: str) -> ProductSnapshot:
    """Look the product up in the catalogue.

    Raises ``ObjectNotFoundError`` when no such product is listed.
    """
    with catalogue.domain_context():
        view = product_view(current_domain.repository_for(Product).get(product_id))

    logger.debug("cart.product_resolved", product_id=product_id, price=view["price"], discount=view["discount"])
    return ProductSnapshot.from_mapping(view)

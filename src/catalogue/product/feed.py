"""Product change feed.

Subscribers receive the full product list, newest first, after every add,
update or delete made through this context.
"""

import structlog

from catalogue.product.listing import all_products
from shared.feed import ChangeFeed, Listener, Unsubscribe

logger = structlog.get_logger(__name__)

product_feed: ChangeFeed[list] = ChangeFeed("products")


def subscribe_to_products(listener: Listener) -> Unsubscribe:
    return product_feed.subscribe(listener)


def publish_products() -> None:
    products = all_products()
    logger.debug("product_feed.published", products=len(products), listeners=product_feed.listener_count)
    product_feed.publish(products)

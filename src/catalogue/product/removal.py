"""Product removal: command, handler and workflow."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.images import get_image_storage
from catalogue.product.feed import publish_products
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if not product.is_listed_by(command.seller_id):
            raise ValidationError({"seller_id": ["Only the seller who listed a product can delete it"]})

        repo._dao.delete(product)


def delete_product(product_id, seller_id) -> None:
    """Delete the product, drop its images from storage and republish the list."""
    image_urls = current_domain.repository_for(Product).get(product_id).image_urls

    current_domain.process(DeleteProduct(product_id=product_id, seller_id=seller_id), asynchronous=False)

    storage = get_image_storage()
    for url in image_urls:
        storage.delete(url)

    logger.info("product.deleted", product_id=str(product_id), seller_id=str(seller_id))
    publish_products()

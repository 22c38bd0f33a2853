"""Product details update: command, handler and workflow."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.creation import ensure_name_is_free
from catalogue.product.feed import publish_products
from catalogue.product.product import Product

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    name: String(max_length=255, sanitize=False)
    price: Float()
    category: String(max_length=100, sanitize=False)
    description: Text(sanitize=False)
    sizes: Text(sanitize=False)  # JSON list
    free_shipping: Boolean()
    discount: Float()


@catalogue.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if not product.is_listed_by(command.seller_id):
            raise ValidationError({"seller_id": ["Only the seller who listed a product can change it"]})
        if command.name and command.name.strip():
            ensure_name_is_free(command.name, product_id=product.id)

        product.update(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            sizes=json.loads(command.sizes) if command.sizes else None,
            free_shipping=command.free_shipping,
            discount=command.discount,
        )
        repo.add(product)


def update_product(product_id, seller_id, **changes) -> None:
    """Apply a partial update and republish the product list."""
    if changes.get("sizes") is not None:
        changes["sizes"] = json.dumps(list(changes["sizes"]))

    current_domain.process(
        UpdateProduct(product_id=product_id, seller_id=seller_id, **changes),
        asynchronous=False,
    )
    logger.info("product.updated", product_id=str(product_id), fields=sorted(changes))
    publish_products()

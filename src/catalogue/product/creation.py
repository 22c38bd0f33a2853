"""Product listing: command, handler and upload workflow."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.images import ImageUpload, ImageUploadError, get_image_storage, validate_image
from catalogue.product.feed import publish_products
from catalogue.product.product import Product, validate_product_data
from catalogue.seller.seller import Seller

logger = structlog.get_logger(__name__)


def _seller_with_store(seller_id) -> Seller:
    seller = current_domain.repository_for(Seller).get(seller_id)
    if not seller.has_store:
        raise ValidationError({"store_name": ["Store name not set. Please set up your store first."]})
    return seller


def ensure_name_is_free(name, product_id=None) -> None:
    """Product names are unique across the catalogue."""
    clashes = current_domain.repository_for(Product)._dao.query.filter(name=str(name).strip()).all().items
    if any(str(product.id) != str(product_id) for product in clashes):
        raise ValidationError({"name": ["A product with this name already exists"]})


@catalogue.command(part_of="Product")
class AddProduct:
    seller_id: Identifier(required=True)
    name: String(required=True, max_length=255, sanitize=False)
    price: Float(required=True)
    category: String(required=True, max_length=100, sanitize=False)
    description: Text(sanitize=False)
    sizes: Text(sanitize=False)  # JSON list
    free_shipping: Boolean(default=False)
    discount: Float()
    image_urls: Text(required=True, sanitize=False)  # JSON list of uploaded image URLs


@catalogue.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        seller = _seller_with_store(command.seller_id)
        ensure_name_is_free(command.name)

        product = Product.add(
            seller_id=command.seller_id,
            store_name=seller.store_name,
            name=command.name,
            price=command.price,
            category=command.category,
            image_urls=json.loads(command.image_urls),
            description=command.description,
            sizes=json.loads(command.sizes) if command.sizes else None,
            free_shipping=command.free_shipping,
            discount=command.discount,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)


def add_product(
    seller_id,
    name,
    price,
    category,
    images: list[ImageUpload],
    description=None,
    sizes=None,
    free_shipping=False,
    discount=None,
) -> str:
    """Validate the form, upload the images and list the product.

    Nothing is uploaded until the form and the seller's store check out. If
    an upload or the listing itself fails, images already uploaded for this
    product are removed again.
    """
    validate_product_data(name=name, price=price, category=category, images=images)
    _seller_with_store(seller_id)
    ensure_name_is_free(name)
    for image in images:
        validate_image(image)

    storage = get_image_storage()
    urls: list[str] = []
    try:
        for image in images:
            urls.append(storage.upload(image))
    except ImageUploadError as exc:
        logger.warning("product.image_upload_failed", seller_id=str(seller_id), reason=str(exc))
        for url in urls:
            storage.delete(url)
        raise ValidationError({"images": [f"Failed to upload image: {exc}"]}) from exc

    try:
        product_id = current_domain.process(
            AddProduct(
                seller_id=seller_id,
                name=name,
                price=price,
                category=category,
                description=description,
                sizes=json.dumps(list(sizes or [])),
                free_shipping=free_shipping,
                discount=discount,
                image_urls=json.dumps(urls),
            ),
            asynchronous=False,
        )
    except ValidationError:
        for url in urls:
            storage.delete(url)
        raise

    logger.info("product.added", product_id=product_id, seller_id=str(seller_id), images=len(urls))
    publish_products()
    return product_id

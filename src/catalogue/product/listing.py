"""Product listing queries: the buyer's paginated grid and a seller's own products."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.product.product import Product

ALL = "All"


def _newest_first(products) -> list[Product]:
    return sorted(products, key=lambda product: product.created_at, reverse=True)


def all_products() -> list[Product]:
    return _newest_first(current_domain.repository_for(Product)._dao.query.limit(None).all().items)


def list_products(page=1, page_size=10, category=None, store_name=None, search=None) -> tuple[list[Product], int]:
    """Return one page of products, newest first, and the number of matches.

    ``category`` and ``store_name`` filter by exact value; ``None`` or
    ``"All"`` disables the filter. ``search`` matches the name or the
    description, ignoring case.
    """
    if page < 1:
        raise ValidationError({"page": ["Page must be 1 or greater"]})
    if page_size < 1:
        raise ValidationError({"page_size": ["Page size must be 1 or greater"]})

    query = current_domain.repository_for(Product)._dao.query
    if category and category != ALL:
        query = query.filter(category=category)
    if store_name and store_name != ALL:
        query = query.filter(store_name=store_name)
    # Queries stop at 100 rows unless the limit is lifted.
    products = query.limit(None).all().items

    needle = (search or "").strip().lower()
    if needle:
        products = [
            product
            for product in products
            if needle in product.name.lower() or needle in (product.description or "").lower()
        ]

    products = _newest_first(products)
    start = (page - 1) * page_size
    return products[start : start + page_size], len(products)


def products_for_seller(seller_id) -> list[Product]:
    query = current_domain.repository_for(Product)._dao.query.filter(seller_id=str(seller_id))
    products = query.limit(None).all().items
    return _newest_first(products)


def product_view(product: Product) -> dict:
    """Flatten a product into the shape the storefront and the cart consume."""
    return {
        "id": str(product.id),
        "name": product.name,
        "price": product.price,
        "discount": product.discount,
        "category": product.category,
        "description": product.description,
        "sizes": product.size_list,
        "free_shipping": product.free_shipping,
        "images": product.image_urls,
        "store_name": product.store_name,
        "admin_id": str(product.seller_id),
        "created_at": product.created_at.isoformat() if product.created_at else None,
        "updated_at": product.updated_at.isoformat() if product.updated_at else None,
    }

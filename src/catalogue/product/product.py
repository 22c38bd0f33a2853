"""Product aggregate root with ProductImage entity."""

import json
from datetime import datetime

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from catalogue.domain import catalogue
from catalogue.product.events import ProductAdded, ProductUpdated

SIZES = ("S", "M", "L", "XL", "XXL")

# Fields a seller may change after listing
EDITABLE_FIELDS = ("name", "price", "category", "description", "sizes", "free_shipping", "discount")


def validate_product_data(name=None, price=None, category=None, images=None) -> None:
    """Check a product form before anything is uploaded.

    Rules are checked in order and only the first failure is reported.
    """
    if not name or not str(name).strip():
        raise ValidationError({"name": ["Product name is required"]})

    if not isinstance(price, int | float) or isinstance(price, bool) or price <= 0:
        raise ValidationError({"price": ["Valid price is required"]})

    if not category or not str(category).strip():
        raise ValidationError({"category": ["Category is required"]})

    if not images:
        raise ValidationError({"images": ["At least one product image is required"]})


def _normalize_sizes(sizes) -> str:
    sizes = sizes or []
    unknown = [size for size in sizes if size not in SIZES]
    if unknown:
        raise ValidationError({"sizes": [f"Unknown size: {', '.join(unknown)}"]})
    return json.dumps([size for size in SIZES if size in sizes])


def _normalize_discount(discount):
    # 0 and missing both mean "no discount"
    return float(discount) if discount else None


@catalogue.entity(part_of="Product")
class ProductImage:
    """Public URL of an uploaded product image."""

    url: String(required=True, max_length=500, sanitize=False)
    display_order: Integer(default=0)


@catalogue.aggregate
class Product:
    """Product aggregate root."""

    seller_id: Identifier(required=True)
    store_name: String(required=True, max_length=255, sanitize=False)
    name: String(required=True, max_length=255, sanitize=False)
    price: Float(required=True, min_value=0.01)
    category: String(required=True, max_length=100, sanitize=False)
    description: Text(sanitize=False)
    sizes: Text(sanitize=False)  # JSON list, in S..XXL order
    free_shipping: Boolean(default=False)
    discount: Float(min_value=0.0, max_value=100.0)
    images: HasMany(ProductImage)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def add(
        cls,
        seller_id,
        store_name,
        name,
        price,
        category,
        image_urls,
        description=None,
        sizes=None,
        free_shipping=False,
        discount=None,
    ):
        validate_product_data(name=name, price=price, category=category, images=image_urls)

        now = datetime.now()
        product = cls(
            seller_id=seller_id,
            store_name=store_name,
            name=name.strip(),
            price=price,
            category=category.strip(),
            description=description,
            sizes=_normalize_sizes(sizes),
            free_shipping=bool(free_shipping),
            discount=_normalize_discount(discount),
            created_at=now,
            updated_at=now,
        )
        with atomic_change(product):
            for position, url in enumerate(image_urls):
                product.add_images(ProductImage(url=url, display_order=position))

        product.raise_(
            ProductAdded(
                product_id=product.id,
                seller_id=seller_id,
                store_name=store_name,
                name=product.name,
                price=price,
                category=product.category,
                created_at=now,
            )
        )
        return product

    @property
    def size_list(self) -> list[str]:
        return json.loads(self.sizes) if self.sizes else []

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in sorted(self.images, key=lambda image: image.display_order)]

    def is_listed_by(self, seller_id) -> bool:
        return str(self.seller_id) == str(seller_id)

    def update(self, **changes):
        """Apply a partial update. Keys left out, or passed as None, are untouched."""
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError({name: ["Field cannot be updated"] for name in unknown})

        changes = {key: value for key, value in changes.items() if value is not None}
        if "name" in changes and not str(changes["name"]).strip():
            raise ValidationError({"name": ["Product name is required"]})
        if "category" in changes and not str(changes["category"]).strip():
            raise ValidationError({"category": ["Category is required"]})
        if "price" in changes:
            price = changes["price"]
            if not isinstance(price, int | float) or isinstance(price, bool) or price <= 0:
                raise ValidationError({"price": ["Valid price is required"]})
        if "sizes" in changes:
            changes["sizes"] = _normalize_sizes(changes["sizes"])
        if "discount" in changes:
            changes["discount"] = _normalize_discount(changes["discount"])

        if not changes:
            return

        for field_name, value in changes.items():
            setattr(self, field_name, value)
        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                seller_id=self.seller_id,
                changed_fields=json.dumps(sorted(changes)),
                updated_at=self.updated_at,
            )
        )

"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductAdded:
    """A seller listed a new product under their store."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    store_name: String(required=True, sanitize=False)
    name: String(required=True, sanitize=False)
    price: Float(required=True)
    category: String(required=True, sanitize=False)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    """Some of a product's listing details changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    changed_fields: Text(required=True, sanitize=False)  # JSON list of field names
    updated_at: DateTime(required=True)

"""Domain events for the Seller aggregate."""

from protean.fields import DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Seller")
class SellerRegistered:
    """A seller signed up. The store name may still be missing."""

    __version__ = 1

    seller_id: Identifier(required=True)
    email: String(required=True, sanitize=False)
    store_name: String(sanitize=False)
    registered_at: DateTime(required=True)


@catalogue.event(part_of="Seller")
class StoreNameSet:
    """A seller named, or renamed, their store."""

    __version__ = 1

    seller_id: Identifier(required=True)
    previous_store_name: String(sanitize=False)
    store_name: String(required=True, sanitize=False)

"""Seller aggregate: the owner of a store and of the products listed in it."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from catalogue.domain import catalogue
from catalogue.seller.events import SellerRegistered, StoreNameSet


@catalogue.aggregate
class Seller:
    """Seller aggregate root.

    A seller can exist without a store name; products can only be listed once
    one is set.
    """

    email: String(required=True, max_length=254, sanitize=False)
    store_name: String(max_length=255, sanitize=False)
    registered_at: DateTime(default=datetime.now)

    @property
    def has_store(self) -> bool:
        return bool(self.store_name)

    @classmethod
    def register(cls, email, store_name=None):
        email = (email or "").strip().lower()
        if "@" not in email:
            raise ValidationError({"email": ["A valid email address is required"]})

        store_name = (store_name or "").strip() or None
        now = datetime.now()
        seller = cls(email=email, store_name=store_name, registered_at=now)
        seller.raise_(
            SellerRegistered(
                seller_id=seller.id,
                email=email,
                store_name=store_name,
                registered_at=now,
            )
        )
        return seller

    def set_store_name(self, store_name):
        store_name = (store_name or "").strip()
        if not store_name:
            raise ValidationError({"store_name": ["Store name is required"]})

        previous = self.store_name
        self.store_name = store_name
        self.raise_(
            StoreNameSet(
                seller_id=self.id,
                previous_store_name=previous,
                store_name=store_name,
            )
        )

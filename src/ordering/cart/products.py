"""The product data a cart line is built from.

Catalogue payloads arrive in more than one shape (``id`` or ``product_id``,
``admin_id`` or ``seller_id``, a list of ``images`` or a single ``image``) and
the discount may be a number, ``0``, ``None`` or missing altogether. All of
that is resolved here, once, so cart code never re-checks it. Every product
must name its seller.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from protean.exceptions import ValidationError

from ordering.cart.pricing import effective_price


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    name: str
    price: float
    discount: float | None = None
    image: str | None = None
    seller_id: str | None = None
    store_name: str | None = None

    @property
    def has_discount(self) -> bool:
        return self.discount is not None

    @property
    def effective_price(self) -> Decimal:
        return effective_price(self.price, self.discount)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProductSnapshot":
        product_id = data.get("product_id") or data.get("id")
        if not product_id:
            raise ValidationError({"product_id": ["Product identifier is required"]})
        if data.get("price") is None:
            raise ValidationError({"price": ["Product price is required"]})
        seller_id = data.get("seller_id") or data.get("admin_id")
        if not seller_id:
            raise ValidationError({"seller_id": ["Product seller is required"]})

        images = data.get("images") or []
        image = data.get("image") or (images[0] if images else None)

        return cls(
            product_id=str(product_id),
            name=data.get("name") or "",
            price=float(data["price"]),
            discount=float(data["discount"]) if data.get("discount") else None,
            image=image,
            seller_id=str(seller_id),
            store_name=data.get("store_name"),
        )

"""Cart aggregate: the buyer's line items and their running total.

The cart lives on the buyer's side: it is never stored in the ordering
database. ``CartStore`` loads it from, and saves it to, local key-value
storage after every change.

The total is not accumulated from deltas. Each mutation recomputes it from the
line items, and a post-invariant rejects any state where the two disagree.
"""

from datetime import UTC, datetime
from decimal import Decimal

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from ordering.cart.pricing import cart_total, effective_price, line_total
from ordering.cart.products import ProductSnapshot
from ordering.domain import ordering


@ordering.entity(part_of="Cart")
class CartLineItem:
    """One product in the cart, with the quantity and size the buyer chose."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255, sanitize=False)
    unit_price = Float(required=True, min_value=0.0)
    discount_percent = Float(min_value=0.0, max_value=100.0)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=20, sanitize=False)
    image = String(max_length=500, sanitize=False)
    seller_id = Identifier()
    store_name = String(max_length=255, sanitize=False)

    @property
    def effective_price(self) -> Decimal:
        return effective_price(self.unit_price, self.discount_percent)

    @property
    def line_total(self) -> Decimal:
        return line_total(self.unit_price, self.discount_percent, self.quantity)

    def to_storage(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "unit_price": self.unit_price,
            "discount_percent": self.discount_percent,
            "quantity": self.quantity,
            "size": self.size,
            "image": self.image,
            "seller_id": str(self.seller_id) if self.seller_id else None,
            "store_name": self.store_name,
        }


@ordering.aggregate
class Cart:
    items = HasMany(CartLineItem)
    total = Float(default=0.0)
    updated_at = DateTime()

    @invariant.post
    def total_must_match_line_items(self):
        if self.total != self.computed_total():
            raise ValidationError({"total": [f"Cart total {self.total} does not match its line items"]})

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        return cls(total=0.0, updated_at=datetime.now(UTC))

    @classmethod
    def from_storage(cls, data):
        """Rebuild a cart from its persisted ``{"items": [...], "total": n}`` form.

        The persisted total is ignored and recomputed from the items.
        Raises ``ValidationError`` when an item is malformed.
        """
        if not isinstance(data, dict) or not isinstance(data.get("items", []), list):
            raise ValidationError({"cart": ["Persisted cart must be an object with an items list"]})

        lines = []
        seen = set()
        for raw in data.get("items", []):
            if not isinstance(raw, dict):
                raise ValidationError({"items": ["Persisted cart item must be an object"]})
            line = CartLineItem(
                product_id=raw.get("product_id"),
                name=raw.get("name"),
                unit_price=raw.get("unit_price"),
                discount_percent=raw.get("discount_percent") or None,
                quantity=raw.get("quantity"),
                size=raw.get("size"),
                image=raw.get("image"),
                seller_id=raw.get("seller_id"),
                store_name=raw.get("store_name"),
            )
            if str(line.product_id) in seen:
                raise ValidationError({"items": [f"Duplicate cart line for product {line.product_id}"]})
            seen.add(str(line.product_id))
            lines.append(line)

        cart = cls.create()
        with atomic_change(cart):
            for line in lines:
                cart.add_items(line)
            cart._recompute_total()
        return cart

    def to_storage(self) -> dict:
        return {
            "items": [item.to_storage() for item in self.items],
            "total": self.total,
        }

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def computed_total(self) -> float:
        return float(cart_total(self.items))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def _recompute_total(self):
        self.total = self.computed_total()
        self.updated_at = datetime.now(UTC)

    def add_item(self, product: ProductSnapshot, quantity=1, size=None):
        """Add ``quantity`` of a product, merging into an existing line if present."""
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be a whole number of at least 1"]})
        if not product.seller_id:
            raise ValidationError({"seller_id": ["Every cart line must name the seller of its product"]})

        existing = self.line_for(product.product_id)
        new_line = None
        if existing is None:
            new_line = CartLineItem(
                product_id=product.product_id,
                name=product.name,
                unit_price=product.price,
                discount_percent=product.discount,
                quantity=quantity,
                size=size,
                image=product.image,
                seller_id=product.seller_id,
                store_name=product.store_name,
            )

        with atomic_change(self):
            if existing is not None:
                existing.quantity += quantity
                if size:
                    existing.size = size
            else:
                self.add_items(new_line)
            self._recompute_total()

        return existing or new_line

    def remove_item(self, product_id) -> bool:
        line = self.line_for(product_id)
        if line is None:
            return False

        with atomic_change(self):
            self.remove_items(line)
            self._recompute_total()
        return True

    def update_quantity(self, product_id, quantity) -> bool:
        """Replace a line's quantity. Zero removes the line.

        Returns False, leaving the cart untouched, for a negative or
        non-integer quantity or an unknown product.
        """
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
            return False

        line = self.line_for(product_id)
        if line is None:
            return False

        if quantity == 0:
            return self.remove_item(product_id)

        with atomic_change(self):
            line.quantity = quantity
            self._recompute_total()
        return True

    def update_size(self, product_id, size) -> bool:
        line = self.line_for(product_id)
        if line is None:
            return False

        line.size = size
        self.updated_at = datetime.now(UTC)
        return True

    def clear_items(self):
        with atomic_change(self):
            for line in list(self.items):
                self.remove_items(line)
            self._recompute_total()

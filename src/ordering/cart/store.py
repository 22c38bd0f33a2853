"""Cart Store: the single owner of the buyer's cart.

Every read goes through the in-memory ``Cart``; every mutation is applied to
it and then written to local storage under one key as
``{"items": [...], "total": n}``. Storage trouble never reaches the caller:
a failed load starts an empty cart, a failed save is logged and the in-memory
cart stays authoritative.

Listeners registered with ``subscribe()`` receive the cart after each change.
"""

import json
from collections.abc import Callable, Mapping

import structlog
from protean.exceptions import ValidationError

from ordering.cart.cart import Cart, CartLineItem
from ordering.cart.products import ProductSnapshot
from ordering.cart.storage import CartStorage, CartStorageError, get_storage
from shared.feed import ChangeFeed, Unsubscribe
from shared.settings import get_settings

logger = structlog.get_logger(__name__)


class CartStore:
    def __init__(self, storage: CartStorage | None = None, key: str | None = None) -> None:
        self.storage = storage if storage is not None else get_storage()
        self.key = key or get_settings().cart_key
        self.cart = Cart.create()
        self._feed: ChangeFeed[Cart] = ChangeFeed("cart")

    # -------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------
    @property
    def items(self) -> list[CartLineItem]:
        return list(self.cart.items)

    @property
    def total(self) -> float:
        return self.cart.total

    @property
    def item_count(self) -> int:
        return self.cart.item_count

    @property
    def is_empty(self) -> bool:
        return self.cart.is_empty

    def snapshot(self) -> dict:
        return self.cart.to_storage()

    def subscribe(self, listener: Callable[[Cart], None]) -> Unsubscribe:
        return self._feed.subscribe(listener)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def load(self) -> Cart:
        """Replace the in-memory cart with the persisted one, or an empty cart."""
        self.cart = self._read()
        self._feed.publish(self.cart)
        return self.cart

    def _read(self) -> Cart:
        try:
            raw = self.storage.read(self.key)
        except CartStorageError as exc:
            logger.warning("cart.load_failed", key=self.key, reason=str(exc))
            return Cart.create()

        if raw is None:
            return Cart.create()

        try:
            cart = Cart.from_storage(json.loads(raw))
        except (json.JSONDecodeError, ValidationError, TypeError, ValueError, RecursionError) as exc:
            logger.warning("cart.load_corrupt", key=self.key, reason=str(exc))
            return Cart.create()

        logger.debug("cart.loaded", key=self.key, lines=len(cart.items), total=cart.total)
        return cart

    def _persist(self) -> None:
        try:
            self.storage.write(self.key, json.dumps(self.cart.to_storage()))
        except CartStorageError as exc:
            logger.error("cart.persist_failed", key=self.key, reason=str(exc))

    def _changed(self, action: str, **context) -> None:
        self._persist()
        logger.debug(f"cart.{action}", total=self.cart.total, **context)
        self._feed.publish(self.cart)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, product: ProductSnapshot | Mapping, quantity: int = 1, size: str | None = None) -> CartLineItem:
        if not isinstance(product, ProductSnapshot):
            product = ProductSnapshot.from_mapping(product)

        line = self.cart.add_item(product, quantity=quantity, size=size)
        self._changed("item_added", product_id=product.product_id, quantity=quantity)
        return line

    def remove_item(self, product_id: str) -> bool:
        removed = self.cart.remove_item(product_id)
        if removed:
            self._changed("item_removed", product_id=product_id)
        return removed

    def update_quantity(self, product_id: str, quantity: int) -> bool:
        updated = self.cart.update_quantity(product_id, quantity)
        if updated:
            self._changed("quantity_updated", product_id=product_id, quantity=quantity)
        else:
            logger.debug("cart.quantity_rejected", product_id=product_id, quantity=quantity)
        return updated

    def update_size(self, product_id: str, size: str) -> bool:
        updated = self.cart.update_size(product_id, size)
        if updated:
            self._changed("size_updated", product_id=product_id, size=size)
        return updated

    def clear(self) -> None:
        self.cart.clear_items()
        self._changed("cleared")

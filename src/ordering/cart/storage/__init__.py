"""Cart storage factory.

Provides get_storage() / set_storage() to swap implementations:
- MemoryCartStorage for development and testing
- FileCartStorage when STOREFRONT_CART_DIR is set
"""

from ordering.cart.storage.file_adapter import FileCartStorage
from ordering.cart.storage.memory_adapter import MemoryCartStorage
from ordering.cart.storage.port import CartStorage, CartStorageError

from shared.settings import get_settings

__all__ = [
    "CartStorage",
    "CartStorageError",
    "FileCartStorage",
    "MemoryCartStorage",
    "get_storage",
    "reset_storage",
    "set_storage",
]

_current_storage: CartStorage | None = None


def get_storage() -> CartStorage:
    """Return the current cart storage, building the default on first use."""
    global _current_storage
    if _current_storage is None:
        cart_dir = get_settings().cart_dir
        _current_storage = FileCartStorage(cart_dir) if cart_dir else MemoryCartStorage()
    return _current_storage


def set_storage(storage: CartStorage) -> None:
    """Override the active cart storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_storage() -> None:
    """Reset to the default storage."""
    global _current_storage
    _current_storage = None

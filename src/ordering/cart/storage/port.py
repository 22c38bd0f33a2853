"""Local cart storage port (abstract interface).

A scoped key-value store holding the serialized cart. Only ``CartStore``
talks to it.
"""

from abc import ABC, abstractmethod


class CartStorageError(Exception):
    """Raised by adapters when the underlying store cannot be read or written."""


class CartStorage(ABC):
    """Abstract key-value storage for serialized carts."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored value, or None when nothing is stored under ``key``."""
        ...

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
        ...

"""Image storage factory.

Provides get_image_storage() / set_image_storage() to swap implementations.
Only the in-memory adapter ships; a hosted object store plugs in through
set_image_storage().
"""

from catalogue.images.memory_adapter import MemoryImageStorage
from catalogue.images.port import ImageStorage, ImageUpload, ImageUploadError, validate_image

from shared.settings import get_settings

_current_storage: ImageStorage | None = None


def get_image_storage() -> ImageStorage:
    """Return the current image storage. Defaults to MemoryImageStorage."""
    global _current_storage
    if _current_storage is None:
        _current_storage = MemoryImageStorage(get_settings().image_base_url)
    return _current_storage


def set_image_storage(storage: ImageStorage) -> None:
    """Override the active image storage (useful for tests)."""
    global _current_storage
    _current_storage = storage


def reset_image_storage() -> None:
    """Reset to default storage."""
    global _current_storage
    _current_storage = None


__all__ = [
    "ImageStorage",
    "ImageUpload",
    "ImageUploadError",
    "MemoryImageStorage",
    "get_image_storage",
    "reset_image_storage",
    "set_image_storage",
    "validate_image",
]

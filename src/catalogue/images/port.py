"""Image storage port (abstract interface).

Product images are uploaded before the product record is written, and only
their public URLs are stored on the product.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from protean.exceptions import ValidationError

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp")
MAX_IMAGE_BYTES = 5 * 1024 * 1024


class ImageUploadError(Exception):
    """Raised by an adapter when the storage backend rejects an upload."""


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content_type: str
    content: bytes

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""

    @property
    def size(self) -> int:
        return len(self.content)


def validate_image(upload: ImageUpload) -> None:
    """Raise ``ValidationError`` unless the upload is a JPEG, PNG or WebP of at most 5 MB."""
    if upload.content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError({"images": ["Invalid file type. Only JPEG, PNG and WebP images are allowed."]})
    if upload.size > MAX_IMAGE_BYTES:
        raise ValidationError({"images": ["File size too large. Maximum size is 5MB."]})


class ImageStorage(ABC):
    """Abstract object storage for product images."""

    @abstractmethod
    def upload(self, upload: ImageUpload) -> str:
        """Store the image and return its public URL."""
        ...

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove a previously uploaded image. Unknown URLs are ignored."""
        ...

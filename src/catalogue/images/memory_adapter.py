"""In-process image storage for development and testing."""

from uuid import uuid4

from catalogue.images.port import ImageStorage, ImageUpload, ImageUploadError


class MemoryImageStorage(ImageStorage):
    """Keeps uploaded bytes in a dict keyed by their public URL."""

    def __init__(self, base_url: str = "https://storage.local/products") -> None:
        self.base_url = base_url.rstrip("/")
        self.blobs: dict[str, bytes] = {}
        self.should_fail: bool = False

    def configure(self, should_fail: bool) -> None:
        self.should_fail = should_fail

    def upload(self, upload: ImageUpload) -> str:
        if self.should_fail:
            raise ImageUploadError(f"Upload of {upload.filename} was rejected")

        name = uuid4().hex
        if upload.extension:
            name = f"{name}.{upload.extension}"
        url = f"{self.base_url}/{name}"
        self.blobs[url] = upload.content
        return url

    def delete(self, url: str) -> None:
        self.blobs.pop(url, None)

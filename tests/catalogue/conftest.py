import base64

import pytest
from catalogue.images import ImageUpload, MemoryImageStorage, set_image_storage
from catalogue.seller.registration import RegisterSeller
from protean import current_domain

# Smallest payloads that still carry the right magic bytes
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture(autouse=True)
def _ctx(catalogue_bed):
    with catalogue_bed.domain_context():
        yield


@pytest.fixture()
def image_storage():
    storage = MemoryImageStorage("https://cdn.example.com/products")
    set_image_storage(storage)
    return storage


@pytest.fixture()
def jpeg():
    return ImageUpload(filename="front.jpg", content_type="image/jpeg", content=JPEG_BYTES)


@pytest.fixture()
def png():
    return ImageUpload(filename="back.PNG", content_type="image/png", content=PNG_BYTES)


@pytest.fixture()
def jpeg_b64():
    return {"filename": "front.jpg", "content_type": "image/jpeg", "data": base64.b64encode(JPEG_BYTES).decode()}


@pytest.fixture()
def register_seller():
    def register(email="linen@example.com", store_name="Linen & Co"):
        return current_domain.process(RegisterSeller(email=email, store_name=store_name), asynchronous=False)

    return register


@pytest.fixture()
def seller_id(register_seller):
    return register_seller()


@pytest.fixture()
def other_seller_id(register_seller):
    return register_seller(email="sundays@example.com", store_name="Sundays")

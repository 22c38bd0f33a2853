"""FastAPI endpoints for the Catalogue domain."""

import base64
import binascii

from fastapi import APIRouter
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    AddProductRequest,
    ImageUploadSchema,
    ProductIdResponse,
    ProductPageResponse,
    RegisterSellerRequest,
    SellerIdResponse,
    SellerResponse,
    SetStoreNameRequest,
    StatusResponse,
    UpdateProductRequest,
)
from catalogue.images import ImageUpload
from catalogue.product.creation import add_product
from catalogue.product.details import update_product
from catalogue.product.listing import list_products, product_view, products_for_seller
from catalogue.product.product import Product
from catalogue.product.removal import delete_product
from catalogue.seller.registration import RegisterSeller, SetStoreName
from catalogue.seller.seller import Seller

seller_router = APIRouter(prefix="/sellers", tags=["sellers"])
product_router = APIRouter(prefix="/products", tags=["products"])


def _decode_image(image: ImageUploadSchema) -> ImageUpload:
    try:
        content = base64.b64decode(image.data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError({"images": [f"{image.filename} is not valid base64 data"]}) from None
    return ImageUpload(filename=image.filename, content_type=image.content_type, content=content)


# --- Seller endpoints ---


@seller_router.post("", status_code=201, response_model=SellerIdResponse)
async def register_seller(body: RegisterSellerRequest) -> SellerIdResponse:
    command = RegisterSeller(email=body.email, store_name=body.store_name)
    result = current_domain.process(command, asynchronous=False)
    return SellerIdResponse(seller_id=result)


@seller_router.get("/{seller_id}", response_model=SellerResponse)
async def get_seller(seller_id: str) -> SellerResponse:
    seller = current_domain.repository_for(Seller).get(seller_id)
    return SellerResponse(seller_id=str(seller.id), email=seller.email, store_name=seller.store_name)


@seller_router.put("/{seller_id}/store-name", response_model=StatusResponse)
async def set_store_name(seller_id: str, body: SetStoreNameRequest) -> StatusResponse:
    command = SetStoreName(seller_id=seller_id, store_name=body.store_name)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@seller_router.get("/{seller_id}/products")
async def list_seller_products(seller_id: str) -> list[dict]:
    return [product_view(product) for product in products_for_seller(seller_id)]


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: AddProductRequest) -> ProductIdResponse:
    product_id = add_product(
        seller_id=body.seller_id,
        name=body.name,
        price=body.price,
        category=body.category,
        images=[_decode_image(image) for image in body.images],
        description=body.description,
        sizes=body.sizes,
        free_shipping=body.free_shipping,
        discount=body.discount,
    )
    return ProductIdResponse(product_id=product_id)


@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    page: int = 1,
    page_size: int = 10,
    category: str | None = None,
    store_name: str | None = None,
    search: str | None = None,
) -> ProductPageResponse:
    items, count = list_products(
        page=page,
        page_size=page_size,
        category=category,
        store_name=store_name,
        search=search,
    )
    return ProductPageResponse(
        items=[product_view(product) for product in items],
        count=count,
        page=page,
        page_size=page_size,
    )


@product_router.get("/{product_id}")
async def get_product(product_id: str) -> dict:
    return product_view(current_domain.repository_for(Product).get(product_id))


@product_router.patch("/{product_id}", response_model=StatusResponse)
async def edit_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    changes = body.model_dump(exclude={"seller_id"}, exclude_none=True)
    update_product(product_id, body.seller_id, **changes)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str, seller_id: str) -> StatusResponse:
    delete_product(product_id, seller_id)
    return StatusResponse()

"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Seller Request Schemas ---


class RegisterSellerRequest(BaseModel):
    email: str
    store_name: str | None = None


class SetStoreNameRequest(BaseModel):
    store_name: str


# --- Product Request Schemas ---


class ImageUploadSchema(BaseModel):
    filename: str
    content_type: str
    data: str  # base64-encoded file content


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "seller_id": "seller-042",
                    "name": "Linen Shirt",
                    "price": 45.0,
                    "category": "Shirts",
                    "description": "Breathable linen shirt with a relaxed fit.",
                    "sizes": ["S", "M", "L"],
                    "free_shipping": True,
                    "discount": 10,
                    "images": [{"filename": "shirt.jpg", "content_type": "image/jpeg", "data": "/9j/4AAQSkZJRg=="}],
                }
            ]
        }
    }

    seller_id: str
    name: str | None = None
    price: float | None = None
    category: str | None = None
    description: str | None = None
    sizes: list[str] = Field(default_factory=list)
    free_shipping: bool = False
    discount: float | None = None
    images: list[ImageUploadSchema] = Field(default_factory=list)


class UpdateProductRequest(BaseModel):
    seller_id: str
    name: str | None = None
    price: float | None = None
    category: str | None = None
    description: str | None = None
    sizes: list[str] | None = None
    free_shipping: bool | None = None
    discount: float | None = None


# --- Response Schemas ---


class SellerIdResponse(BaseModel):
    seller_id: str


class SellerResponse(BaseModel):
    seller_id: str
    email: str
    store_name: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductPageResponse(BaseModel):
    items: list[dict]
    count: int
    page: int
    page_size: int


class StatusResponse(BaseModel):
    status: str = "ok"

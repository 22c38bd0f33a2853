"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer), kept separate from
internal Protean commands and the checkout session.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, default=1)
    size: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "quantity": 2,
                    "size": "M",
                }
            ]
        }
    }


class UpdateQuantityRequest(BaseModel):
    quantity: int


class UpdateSizeRequest(BaseModel):
    size: str = Field(min_length=1, max_length=20)


# ---------------------------------------------------------------------------
# Checkout Request Schemas
# ---------------------------------------------------------------------------
class ShippingFieldsRequest(BaseModel):
    full_name: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    email: str | None = None
    phone_number: str | None = None
    state: str | None = None


class ApprovePaymentRequest(BaseModel):
    token: str | None = None


class PaymentErrorRequest(BaseModel):
    error: str | None = None


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str
    seller_id: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class CartLineResponse(BaseModel):
    product_id: str
    name: str
    unit_price: float
    discount_percent: float | None = None
    effective_price: float
    quantity: int
    line_total: float
    size: str | None = None
    image: str | None = None
    seller_id: str | None = None
    store_name: str | None = None


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total: float
    item_count: int


class CheckoutResponse(BaseModel):
    checkout_id: str
    state: str


class CheckoutOutcomeResponse(BaseModel):
    success: bool
    state: str
    message: str
    retryable: bool = False
    token: str | None = None
    order_id: str | None = None
    order_recorded: bool = False


class StatusResponse(BaseModel):
    status: str = "ok"

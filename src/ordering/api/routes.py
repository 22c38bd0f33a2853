"""FastAPI routes for the Ordering domain: cart, checkout and orders.

The cart belongs to the buyer's device; the ``X-Cart-Key`` header names the
local storage slot a request works on and defaults to the configured key.
"""

from collections import OrderedDict

from fastapi import APIRouter, Header
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AddToCartRequest,
    ApprovePaymentRequest,
    CartLineResponse,
    CartResponse,
    CheckoutOutcomeResponse,
    CheckoutResponse,
    PaymentErrorRequest,
    ShippingFieldsRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateQuantityRequest,
    UpdateSizeRequest,
)
from ordering.cart.catalogue_lookup import product_snapshot
from ordering.cart.store import CartStore
from ordering.checkout.session import CheckoutOutcome, CheckoutSession, CheckoutState
from ordering.order.seller_view import orders_for_seller, seller_order_view
from ordering.order.status import UpdateOrderStatus
from shared.settings import get_settings

# ---------------------------------------------------------------------------
# Live carts and checkout sessions
# ---------------------------------------------------------------------------
# Both maps hold at most `session_limit` entries; the least recently used is
# dropped first. A completed checkout is dropped as soon as it completes.
_cart_stores: OrderedDict[str, CartStore] = OrderedDict()
_checkouts: OrderedDict[str, CheckoutSession] = OrderedDict()


def _remember(registry: OrderedDict, key: str, value) -> None:
    registry[key] = value
    registry.move_to_end(key)
    limit = max(get_settings().session_limit, 1)
    while len(registry) > limit:
        registry.popitem(last=False)


def cart_store_for(key: str | None) -> CartStore:
    key = key or get_settings().cart_key
    store = _cart_stores.get(key)
    if store is None:
        store = CartStore(key=key)
        store.load()
    _remember(_cart_stores, key, store)
    return store


def checkout_for(checkout_id: str) -> CheckoutSession:
    session = _checkouts.get(checkout_id)
    if session is None:
        raise ObjectNotFoundError({"checkout_id": [f"Checkout {checkout_id} does not exist"]})
    _checkouts.move_to_end(checkout_id)
    return session


def _settle(session: CheckoutSession, outcome: CheckoutOutcome) -> CheckoutOutcomeResponse:
    if session.state is CheckoutState.COMPLETED:
        _checkouts.pop(session.id, None)
    return _outcome_response(outcome)


def reset_sessions() -> None:
    """Forget every live cart and checkout session."""
    _cart_stores.clear()
    _checkouts.clear()


def _cart_response(store: CartStore) -> CartResponse:
    return CartResponse(
        items=[
            CartLineResponse(
                product_id=str(item.product_id),
                name=item.name,
                unit_price=item.unit_price,
                discount_percent=item.discount_percent,
                effective_price=float(item.effective_price),
                quantity=item.quantity,
                line_total=float(item.line_total),
                size=item.size,
                image=item.image,
                seller_id=str(item.seller_id) if item.seller_id else None,
                store_name=item.store_name,
            )
            for item in store.items
        ],
        total=store.total,
        item_count=store.item_count,
    )


def _outcome_response(outcome: CheckoutOutcome) -> CheckoutOutcomeResponse:
    return CheckoutOutcomeResponse(
        success=outcome.success,
        state=outcome.state.value,
        message=outcome.message,
        retryable=outcome.retryable,
        token=outcome.token,
        order_id=outcome.order_id,
        order_recorded=outcome.order_recorded,
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(x_cart_key: str | None = Header(default=None)) -> CartResponse:
    return _cart_response(cart_store_for(x_cart_key))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, x_cart_key: str | None = Header(default=None)) -> CartResponse:
    store = cart_store_for(x_cart_key)
    store.add_item(product_snapshot(body.product_id), quantity=body.quantity, size=body.size)
    return _cart_response(store)


@cart_router.put("/items/{product_id}/quantity", response_model=CartResponse)
async def update_cart_item_quantity(
    product_id: str, body: UpdateQuantityRequest, x_cart_key: str | None = Header(default=None)
) -> CartResponse:
    store = cart_store_for(x_cart_key)
    store.update_quantity(product_id, body.quantity)
    return _cart_response(store)


@cart_router.put("/items/{product_id}/size", response_model=CartResponse)
async def update_cart_item_size(
    product_id: str, body: UpdateSizeRequest, x_cart_key: str | None = Header(default=None)
) -> CartResponse:
    store = cart_store_for(x_cart_key)
    store.update_size(product_id, body.size)
    return _cart_response(store)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, x_cart_key: str | None = Header(default=None)) -> CartResponse:
    store = cart_store_for(x_cart_key)
    store.remove_item(product_id)
    return _cart_response(store)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(x_cart_key: str | None = Header(default=None)) -> CartResponse:
    store = cart_store_for(x_cart_key)
    store.clear()
    return _cart_response(store)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("", status_code=201, response_model=CheckoutResponse)
async def start_checkout(x_cart_key: str | None = Header(default=None)) -> CheckoutResponse:
    session = CheckoutSession(cart_store_for(x_cart_key))
    _remember(_checkouts, session.id, session)
    return CheckoutResponse(checkout_id=session.id, state=session.state.value)


@checkout_router.get("/{checkout_id}", response_model=CheckoutResponse)
async def get_checkout(checkout_id: str) -> CheckoutResponse:
    session = checkout_for(checkout_id)
    return CheckoutResponse(checkout_id=session.id, state=session.state.value)


@checkout_router.put("/{checkout_id}/shipping", response_model=CheckoutResponse)
async def update_shipping(checkout_id: str, body: ShippingFieldsRequest) -> CheckoutResponse:
    session = checkout_for(checkout_id)
    session.update_shipping(**body.model_dump(exclude_none=True))
    return CheckoutResponse(checkout_id=session.id, state=session.state.value)


@checkout_router.post("/{checkout_id}/shipping/submit", response_model=CheckoutResponse)
async def submit_shipping(checkout_id: str) -> CheckoutResponse:
    session = checkout_for(checkout_id)
    session.submit_shipping()
    return CheckoutResponse(checkout_id=session.id, state=session.state.value)


@checkout_router.post("/{checkout_id}/payment-order", response_model=CheckoutOutcomeResponse)
async def create_payment_order(checkout_id: str) -> CheckoutOutcomeResponse:
    return _outcome_response(checkout_for(checkout_id).create_payment_order())


@checkout_router.post("/{checkout_id}/approve", response_model=CheckoutOutcomeResponse)
async def approve_payment(checkout_id: str, body: ApprovePaymentRequest) -> CheckoutOutcomeResponse:
    session = checkout_for(checkout_id)
    return _settle(session, session.on_approve(body.token))


@checkout_router.post("/{checkout_id}/error", response_model=CheckoutOutcomeResponse)
async def payment_error(checkout_id: str, body: PaymentErrorRequest) -> CheckoutOutcomeResponse:
    session = checkout_for(checkout_id)
    return _settle(session, session.on_error(body.error))


@checkout_router.post("/{checkout_id}/cancel", response_model=CheckoutOutcomeResponse)
async def cancel_payment(checkout_id: str) -> CheckoutOutcomeResponse:
    session = checkout_for(checkout_id)
    return _settle(session, session.on_cancel())


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("")
async def list_seller_orders(seller_id: str) -> list[dict]:
    return [seller_order_view(order, seller_id) for order in orders_for_seller(seller_id)]


@order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        seller_id=body.seller_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()

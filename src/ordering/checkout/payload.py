"""Builds the order payload handed to the order sink after a successful capture."""

from datetime import datetime

from ordering.cart.cart import Cart
from ordering.checkout.shipping import ShippingInfo
from ordering.order.order import OrderStatus


def _line(item) -> dict:
    line = {
        "product_id": str(item.product_id),
        "name": item.name,
        "quantity": item.quantity,
        "price": float(item.effective_price),
        "admin_id": str(item.seller_id) if item.seller_id else None,
        "store_name": item.store_name,
    }
    if item.size:
        line["size"] = item.size
    return line


def build_order_payload(
    cart: Cart,
    shipping: ShippingInfo,
    placed_at: datetime,
    currency: str = "USD",
    payment_method: str = "PayPal",
    payment_reference: str | None = None,
) -> dict:
    """One payload line per cart line, each carrying its seller id and store name."""
    return {
        "customer": shipping.full_name,
        "total": cart.total,
        "currency": currency,
        "status": OrderStatus.PENDING.value,
        "date": placed_at.isoformat(),
        "payment_reference": payment_reference,
        "customer_details": {
            "firstName": shipping.first_name,
            "lastName": shipping.last_name,
            "email": shipping.email,
            "phoneNumber": shipping.phone_number,
            "address": shipping.address,
            "city": shipping.city,
            "state": shipping.state,
            "zipCode": shipping.postal_code,
            "country": shipping.country,
            "paymentMethod": payment_method,
        },
        "items": [_line(item) for item in cart.items],
    }

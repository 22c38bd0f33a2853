"""Tests for PlaceOrder and UpdateOrderStatus through the ordering domain."""

import json
from datetime import UTC, datetime

import pytest
from ordering.order.order import Order, OrderStatus
from ordering.order.placement import PlaceOrder
from ordering.order.status import UpdateOrderStatus
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

CUSTOMER_DETAILS = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "address": "12 Analytical Row",
    "city": "London",
    "zip_code": "NW1 6XE",
    "country": "UK",
}


def _items(*lines):
    return json.dumps(
        list(lines)
        or [
            {
                "product_id": "prod-shirt",
                "name": "Linen Shirt",
                "quantity": 2,
                "price": 45.0,
                "seller_id": "seller-001",
                "store_name": "Linen & Co",
                "size": "M",
            },
            {
                "product_id": "prod-dress",
                "name": "Summer Dress",
                "quantity": 1,
                "price": 20.0,
                "seller_id": "seller-002",
                "store_name": "Sundays",
                "size": "S",
            },
        ]
    )


def place_order(total=110.0, items=None, date=None):
    return current_domain.process(
        PlaceOrder(
            customer="Ada Lovelace",
            total=total,
            customer_details=json.dumps(CUSTOMER_DETAILS),
            items=items or _items(),
            payment_reference="cap-001",
            date=date,
        ),
        asynchronous=False,
    )


class TestPlaceOrder:
    def test_place_order_persists(self):
        order_id = place_order()
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.total == 110.0
        assert order.payment_reference == "cap-001"
        assert len(order.items) == 2
        assert order.customer_details.city == "London"

    def test_date_is_kept(self):
        placed = datetime(2026, 3, 14, 9, 30, tzinfo=UTC)
        order_id = place_order(date=placed)
        order = current_domain.repository_for(Order).get(order_id)
        assert order.date.replace(tzinfo=UTC) == placed

    def test_mismatched_total_is_rejected(self):
        with pytest.raises(ValidationError):
            place_order(total=50.0)


class TestUpdateOrderStatus:
    def test_seller_marks_delivered(self):
        order_id = place_order()
        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status="Delivered", seller_id="seller-001"),
            asynchronous=False,
        )
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.DELIVERED.value

    def test_other_seller_cannot_touch_order(self):
        order_id = place_order()
        with pytest.raises(ValidationError) as exc_info:
            current_domain.process(
                UpdateOrderStatus(order_id=order_id, status="Cancelled", seller_id="seller-999"),
                asynchronous=False,
            )
        assert "seller_id" in exc_info.value.messages
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value

    def test_invalid_transition_is_rejected(self):
        order_id = place_order()
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateOrderStatus(order_id=order_id, status="Refunded", seller_id="seller-001"),
                asynchronous=False,
            )

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateOrderStatus(order_id="missing-order", status="Delivered"),
                asynchronous=False,
            )

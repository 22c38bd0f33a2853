"""Tests for the seller-facing order list."""

import json
from datetime import UTC, datetime, timedelta

from ordering.order.placement import PlaceOrder
from ordering.order.seller_view import orders_for_seller, seller_order_view
from ordering.order.status import UpdateOrderStatus
from protean import current_domain

CUSTOMER_DETAILS = json.dumps(
    {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone_number": "555-0100",
        "address": "12 Analytical Row",
        "city": "London",
        "zip_code": "NW1 6XE",
        "country": "UK",
    }
)

BASE_DATE = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)


def _place(seller_ids, days_ago=0):
    lines = [
        {
            "product_id": f"prod-{seller_id}",
            "name": f"Item from {seller_id}",
            "quantity": 1,
            "price": 10.0,
            "seller_id": seller_id,
            "store_name": f"Store {seller_id}",
            "size": "M",
        }
        for seller_id in seller_ids
    ]
    return current_domain.process(
        PlaceOrder(
            customer="Ada Lovelace",
            total=10.0 * len(lines),
            customer_details=CUSTOMER_DETAILS,
            items=json.dumps(lines),
            date=BASE_DATE - timedelta(days=days_ago),
        ),
        asynchronous=False,
    )


def _set_status(order_id, status):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestOrdersForSeller:
    def test_only_orders_with_seller_lines(self):
        mine = _place(["seller-a"])
        shared = _place(["seller-a", "seller-b"])
        _place(["seller-b"])

        ids = {str(order.id) for order in orders_for_seller("seller-a")}
        assert ids == {mine, shared}

    def test_pending_first_then_newest(self):
        old_pending = _place(["seller-a"], days_ago=5)
        new_delivered = _place(["seller-a"], days_ago=0)
        new_pending = _place(["seller-a"], days_ago=1)
        _set_status(new_delivered, "Delivered")

        ids = [str(order.id) for order in orders_for_seller("seller-a")]
        assert ids == [new_pending, old_pending, new_delivered]

    def test_no_orders(self):
        assert orders_for_seller("seller-none") == []

    def test_order_beyond_the_first_hundred_is_listed(self):
        for _ in range(105):
            _place(["seller-b"], days_ago=2)
        latest = _place(["seller-a"])

        assert [str(order.id) for order in orders_for_seller("seller-a")] == [latest]
        assert len(orders_for_seller("seller-b")) == 105


class TestSellerOrderView:
    def test_view_keeps_only_the_sellers_lines(self):
        order_id = _place(["seller-a", "seller-b"])
        order = orders_for_seller("seller-b")[0]

        view = seller_order_view(order, "seller-b")
        assert view["order_id"] == order_id
        assert view["status"] == "Pending"
        assert view["customer"] == "Ada Lovelace"
        assert view["contact"] == {"email": "ada@example.com", "phone_number": "555-0100"}
        assert view["address"]["city"] == "London"
        assert view["payment_method"] == "PayPal"
        assert [item["name"] for item in view["items"]] == ["Item from seller-b"]

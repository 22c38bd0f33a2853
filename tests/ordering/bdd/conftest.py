"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.cart.storage import MemoryCartStorage
from ordering.cart.store import CartStore
from ordering.checkout.session import CheckoutSession
from ordering.checkout.sink import RecordingOrderSink
from payments.gateway.fake_adapter import FakePaymentWidget
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def cart_store():
    return CartStore(storage=MemoryCartStorage())


@pytest.fixture()
def sink():
    return RecordingOrderSink()


@pytest.fixture()
def checkout():
    """Container for the checkout session created by a Given step."""
    return {"session": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(cart_store):
    assert cart_store.is_empty


@given(parsers.cfparse('a cart holding {qty:d} of "{product_id}" priced {price:f} in size "{size}"'))
def cart_holding(cart_store, qty, product_id, price, size):
    cart_store.add_item(
        {"id": product_id, "name": f"Product {product_id}", "price": price, "admin_id": "seller-001"},
        quantity=qty,
        size=size,
    )


@given("a checkout with complete shipping details")
def checkout_with_shipping(cart_store, sink, checkout):
    session = CheckoutSession(cart_store, widget=FakePaymentWidget(), order_sink=sink)
    session.update_shipping(
        full_name="Ada Lovelace",
        address="12 Analytical Row",
        city="London",
        postal_code="NW1 6XE",
        country="UK",
    )
    session.submit_shipping()
    session.create_payment_order()
    checkout["session"] = session


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total_is(cart_store, total):
    assert cart_store.total == pytest.approx(total)


@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_line(cart_store, count):
    assert len(cart_store.items) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart_store, count):
    assert len(cart_store.items) == count


@then("the cart is empty")
def cart_is_empty(cart_store):
    assert cart_store.is_empty
    assert cart_store.total == 0.0

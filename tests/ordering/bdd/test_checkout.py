"""BDD tests for the checkout payment callbacks."""

from ordering.checkout.session import CheckoutState
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/checkout.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the buyer approves the payment")
def approve(checkout):
    checkout["session"].on_approve()


@when("the payment widget reports an error")
def widget_error(checkout):
    checkout["session"].on_error("INSTRUMENT_DECLINED")


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the checkout is "{state}"'))
def checkout_is(checkout, state):
    assert checkout["session"].state is CheckoutState(state)


@then(parsers.cfparse("the order sink received {count:d} order with {lines:d} line"))
def sink_received_with_lines(sink, count, lines):
    assert len(sink.payloads) == count
    assert len(sink.payloads[0]["items"]) == lines


@then(parsers.cfparse("the order sink received {count:d} orders"))
def sink_received(sink, count):
    assert len(sink.payloads) == count

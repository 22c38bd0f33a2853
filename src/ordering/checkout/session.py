"""Checkout session: shipping, payment and order placement for one cart.

State Machine:
    COLLECTING_SHIPPING → AWAITING_PAYMENT → COMPLETED

The session never raises collaborator failures at the caller. The payment
widget and the order sink answer with result objects and every call to them is
guarded, so the caller always gets a ``CheckoutOutcome`` it can show. Only
bad input (an incomplete shipping form, an empty cart, an out-of-order call)
surfaces as ``ValidationError``.

The order recorded on approval is built from the cart as it stood when the
payment order was created, so the amount captured and the order total agree
even if the cart changes in between.

Once the funds are captured the sale is final: if the order cannot be
recorded afterwards the buyer still sees success, and the loss is logged
under ``checkout.order_not_recorded`` for someone to reconcile by hand.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from ordering.cart.cart import Cart
from ordering.cart.store import CartStore
from ordering.checkout.payload import build_order_payload
from ordering.checkout.shipping import ShippingForm, ShippingInfo
from ordering.checkout.sink import DomainOrderSink, OrderSink, SubmissionResult
from payments.gateway import get_widget
from payments.gateway.port import CaptureResult, PaymentOrderResult, PaymentWidget
from shared.settings import get_settings

logger = structlog.get_logger(__name__)


class CheckoutState(Enum):
    COLLECTING_SHIPPING = "CollectingShipping"
    AWAITING_PAYMENT = "AwaitingPayment"
    COMPLETED = "Completed"


_VALID_TRANSITIONS = {
    CheckoutState.COLLECTING_SHIPPING: {CheckoutState.AWAITING_PAYMENT},
    CheckoutState.AWAITING_PAYMENT: {CheckoutState.COMPLETED},
    CheckoutState.COMPLETED: set(),  # Terminal
}

PAYMENT_SUCCEEDED = "Payment successful!"
PAYMENT_FAILED = "Payment failed. Please try again."
PAYMENT_CANCELLED = "Payment was cancelled. You can try again."


@dataclass(frozen=True)
class CheckoutOutcome:
    """What the buyer is told after a checkout step."""

    success: bool
    state: CheckoutState
    message: str
    retryable: bool = False
    token: str | None = None
    order_id: str | None = None
    order_recorded: bool = False


class CheckoutSession:
    def __init__(
        self,
        cart_store: CartStore,
        widget: PaymentWidget | None = None,
        order_sink: OrderSink | None = None,
        currency: str | None = None,
        payment_method: str = "PayPal",
    ) -> None:
        self.id = uuid4().hex
        self.cart_store = cart_store
        self.widget = widget if widget is not None else get_widget()
        self.order_sink = order_sink if order_sink is not None else DomainOrderSink()
        self.currency = currency or get_settings().currency
        self.payment_method = payment_method

        self.state = CheckoutState.COLLECTING_SHIPPING
        self.form = ShippingForm()
        self.shipping: ShippingInfo | None = None
        self.token: str | None = None
        self.paid_cart: Cart | None = None
        self.completed: CheckoutOutcome | None = None
        self._log = logger.bind(checkout_id=self.id)

    # -------------------------------------------------------------------
    # State handling
    # -------------------------------------------------------------------
    def _assert_state(self, expected: CheckoutState) -> None:
        if self.state is not expected:
            raise ValidationError({"checkout": [f"Checkout is {self.state.value}, expected {expected.value}"]})

    def _transition(self, target: CheckoutState) -> None:
        if target not in _VALID_TRANSITIONS[self.state]:
            raise ValidationError({"checkout": [f"Cannot move checkout from {self.state.value} to {target.value}"]})
        self._log.info("checkout.state_changed", previous=self.state.value, new=target.value)
        self.state = target

    def _retryable(self, message: str) -> CheckoutOutcome:
        return CheckoutOutcome(success=False, state=self.state, message=message, retryable=True)

    def _assert_cart_ready(self) -> None:
        if self.cart_store.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

        unsized = [item.name for item in self.cart_store.items if not item.size]
        if unsized:
            raise ValidationError({"size": [f"Please choose a size for {name}" for name in unsized]})

    # -------------------------------------------------------------------
    # Shipping
    # -------------------------------------------------------------------
    def update_shipping(self, **fields) -> ShippingForm:
        self._assert_state(CheckoutState.COLLECTING_SHIPPING)
        self.form.update(**fields)
        return self.form

    def submit_shipping(self) -> ShippingInfo:
        """Validate the form and the cart, then wait for payment.

        Raises ``ValidationError`` and stays in ``COLLECTING_SHIPPING`` when
        a required field is blank, the cart is empty or a line has no size.
        """
        self._assert_state(CheckoutState.COLLECTING_SHIPPING)
        self._assert_cart_ready()

        try:
            self.shipping = self.form.validate()
        except ValidationError as exc:
            self._log.info("checkout.shipping_rejected", fields=sorted(exc.messages))
            raise

        self._transition(CheckoutState.AWAITING_PAYMENT)
        return self.shipping

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def _description(self, cart: Cart) -> str:
        count = cart.item_count
        return f"Storefront order ({count} item{'s' if count != 1 else ''})"

    def create_payment_order(self) -> CheckoutOutcome:
        self._assert_state(CheckoutState.AWAITING_PAYMENT)
        if self.cart_store.is_empty:
            raise ValidationError({"cart": ["Your cart is empty"]})

        # The order recorded on approval is the cart as it was priced here
        paid_cart = Cart.from_storage(self.cart_store.snapshot())
        amount = paid_cart.total
        try:
            result = self.widget.create_order(amount, self.currency, self._description(paid_cart))
        except Exception as exc:  # noqa: BLE001
            result = PaymentOrderResult(success=False, gateway_status="error", failure_reason=str(exc))

        if not result.success:
            self._log.warning("checkout.payment_order_failed", amount=amount, reason=result.failure_reason)
            return self._retryable(PAYMENT_FAILED)

        self.token = result.token
        self.paid_cart = paid_cart
        self._log.info("checkout.payment_order_created", amount=amount, currency=self.currency)
        return CheckoutOutcome(
            success=True,
            state=self.state,
            message="Payment order created",
            token=result.token,
        )

    def _capture(self, token: str) -> CaptureResult:
        try:
            return self.widget.capture(token)
        except Exception as exc:  # noqa: BLE001
            return CaptureResult(success=False, gateway_status="error", failure_reason=str(exc))

    def _submit(self, payload: dict) -> SubmissionResult:
        try:
            return self.order_sink.submit(payload)
        except Exception as exc:  # noqa: BLE001
            return SubmissionResult(success=False, failure_reason=str(exc))

    def on_approve(self, token: str | None = None) -> CheckoutOutcome:
        """Capture the approved payment, record the order and empty the cart."""
        if self.completed is not None:
            self._log.info("checkout.duplicate_callback", callback="approve")
            return self.completed

        self._assert_state(CheckoutState.AWAITING_PAYMENT)
        token = token or self.token
        if not token:
            return self._retryable(PAYMENT_FAILED)

        capture = self._capture(token)
        if not capture.success:
            self._log.warning("checkout.capture_failed", reason=capture.failure_reason)
            return self._retryable(PAYMENT_FAILED)

        paid_cart = self.paid_cart if self.paid_cart is not None else Cart.from_storage(self.cart_store.snapshot())
        payload = build_order_payload(
            paid_cart,
            self.shipping,
            placed_at=datetime.now(UTC),
            currency=self.currency,
            payment_method=self.payment_method,
            payment_reference=capture.capture_id,
        )
        submission = self._submit(payload)
        if submission.success:
            self._log.info("checkout.order_recorded", order_id=submission.order_id, total=payload["total"])
        else:
            self._log.error(
                "checkout.order_not_recorded",
                capture_id=capture.capture_id,
                total=payload["total"],
                customer=payload["customer"],
                reason=submission.failure_reason,
            )

        self.cart_store.clear()
        self._transition(CheckoutState.COMPLETED)
        self.completed = CheckoutOutcome(
            success=True,
            state=self.state,
            message=PAYMENT_SUCCEEDED,
            order_id=submission.order_id,
            order_recorded=submission.success,
        )
        return self.completed

    def on_error(self, error=None) -> CheckoutOutcome:
        if self.completed is not None:
            self._log.info("checkout.duplicate_callback", callback="error")
            return self.completed

        self._assert_state(CheckoutState.AWAITING_PAYMENT)
        self._log.warning("checkout.payment_error", error=str(error) if error is not None else None)
        return self._retryable(PAYMENT_FAILED)

    def on_cancel(self) -> CheckoutOutcome:
        if self.completed is not None:
            self._log.info("checkout.duplicate_callback", callback="cancel")
            return self.completed

        self._assert_state(CheckoutState.AWAITING_PAYMENT)
        self._log.info("checkout.payment_cancelled")
        return self._retryable(PAYMENT_CANCELLED)

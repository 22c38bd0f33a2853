"""Configurable fake payment widget for development and testing.

Simulates the hosted widget without any external calls. It can be told to
fail either when the order is opened or when funds are captured, which is
enough to drive every checkout path in tests.
"""

from uuid import uuid4

from payments.gateway.port import CaptureResult, PaymentOrderResult, PaymentWidget


class FakePaymentWidget(PaymentWidget):
    """Configurable fake payment widget."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.fail_on: str = "capture"
        self.failure_reason: str = "Payment declined"
        self.orders: dict[str, dict] = {}
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Payment declined",
        fail_on: str = "capture",
    ) -> None:
        """Configure widget behavior at runtime. ``fail_on`` is "create" or "capture"."""
        if fail_on not in ("create", "capture"):
            raise ValueError(f"fail_on must be 'create' or 'capture', got {fail_on!r}")
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.fail_on = fail_on

    def create_order(
        self,
        amount: float,
        currency: str,
        description: str,
    ) -> PaymentOrderResult:
        self.calls.append(
            {
                "method": "create_order",
                "amount": amount,
                "currency": currency,
                "description": description,
            }
        )

        if not self.should_succeed and self.fail_on == "create":
            return PaymentOrderResult(
                success=False,
                gateway_status="failed",
                failure_reason=self.failure_reason,
            )

        token = f"fake_order_{uuid4().hex[:12]}"
        self.orders[token] = {"amount": amount, "currency": currency, "status": "CREATED"}
        return PaymentOrderResult(success=True, token=token, gateway_status="CREATED")

    def capture(self, token: str) -> CaptureResult:
        self.calls.append({"method": "capture", "token": token})

        order = self.orders.get(token)
        if order is None:
            return CaptureResult(success=False, gateway_status="failed", failure_reason=f"Unknown order {token}")

        if not self.should_succeed and self.fail_on == "capture":
            return CaptureResult(
                success=False,
                gateway_status="failed",
                failure_reason=self.failure_reason,
            )

        order["status"] = "COMPLETED"
        return CaptureResult(
            success=True,
            capture_id=f"fake_capture_{uuid4().hex[:12]}",
            gateway_status="COMPLETED",
            amount=order["amount"],
            currency=order["currency"],
        )

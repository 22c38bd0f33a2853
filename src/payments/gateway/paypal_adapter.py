"""PayPal payment widget adapter (production stub).

This is a placeholder for the real PayPal Orders API integration.
In production, this would:
- Create an order with intent CAPTURE and a single purchase unit
- Capture the order once the buyer approves it in the PayPal buttons
"""

from payments.gateway.port import CaptureResult, PaymentOrderResult, PaymentWidget


class PayPalWidget(PaymentWidget):
    """Production PayPal adapter. Not yet implemented."""

    def __init__(self, client_id: str, client_secret: str) -> None:
        self.client_id = client_id
        self.client_secret = client_secret

    def create_order(
        self,
        amount: float,
        currency: str,
        description: str,
    ) -> PaymentOrderResult:
        raise NotImplementedError(
            "PayPalWidget.create_order() is not yet implemented. Call the PayPal Orders API (POST /v2/checkout/orders)."
        )

    def capture(self, token: str) -> CaptureResult:
        raise NotImplementedError(
            "PayPalWidget.capture() is not yet implemented. Call POST /v2/checkout/orders/{id}/capture here."
        )

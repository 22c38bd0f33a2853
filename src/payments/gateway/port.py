"""Payment widget port (abstract interface).

Defines the contract every payment widget adapter must implement. The
storefront only ever hands over an amount, a currency and a description and
gets pass/fail answers back; card and account details stay with the widget.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentOrderResult:
    """Result of asking the widget to open a payment order."""

    success: bool
    token: str | None = None
    gateway_status: str | None = None
    failure_reason: str | None = None


@dataclass(frozen=True)
class CaptureResult:
    """Result of capturing the funds of an approved payment order."""

    success: bool
    capture_id: str | None = None
    gateway_status: str | None = None
    amount: float | None = None
    currency: str | None = None
    failure_reason: str | None = None


class PaymentWidget(ABC):
    """Abstract payment widget interface."""

    @abstractmethod
    def create_order(
        self,
        amount: float,
        currency: str,
        description: str,
    ) -> PaymentOrderResult:
        """Open a payment order the buyer can approve."""
        ...

    @abstractmethod
    def capture(self, token: str) -> CaptureResult:
        """Capture the funds of an approved order."""
        ...

"""Payment widget factory.

Provides get_widget() / set_widget() to swap implementations:
- FakePaymentWidget for development and testing
- PayPalWidget for production (stub), installed explicitly with set_widget()
"""

from payments.gateway.fake_adapter import FakePaymentWidget
from payments.gateway.port import PaymentWidget

_current_widget: PaymentWidget | None = None


def get_widget() -> PaymentWidget:
    """Return the current payment widget. Defaults to FakePaymentWidget."""
    global _current_widget
    if _current_widget is None:
        _current_widget = FakePaymentWidget()
    return _current_widget


def set_widget(widget: PaymentWidget) -> None:
    """Override the active payment widget (useful for tests)."""
    global _current_widget
    _current_widget = widget


def reset_widget() -> None:
    """Reset to default widget."""
    global _current_widget
    _current_widget = None

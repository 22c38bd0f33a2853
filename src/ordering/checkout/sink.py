"""Order persistence port and its in-domain adapter.

Checkout hands a finished order payload to an ``OrderSink`` and gets a
``SubmissionResult`` back. Whatever goes wrong on the other side is reported
through the result, never raised into checkout.

Payload shape::

    {customer, total, currency, status, date, payment_reference,
     customer_details: {firstName, lastName, email, phoneNumber, address,
                        city, state, zipCode, country, paymentMethod},
     items: [{product_id, name, quantity, price, admin_id, store_name, size?}]}
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

import structlog
from protean.utils.globals import current_domain

from ordering.order.placement import PlaceOrder

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    """Result of handing an order payload to the persistence collaborator."""

    success: bool
    order_id: str | None = None
    failure_reason: str | None = None


class OrderSink(ABC):
    """Abstract order persistence interface."""

    @abstractmethod
    def submit(self, payload: dict) -> SubmissionResult:
        """Persist an order payload."""
        ...


_CUSTOMER_DETAIL_KEYS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "phoneNumber": "phone_number",
    "address": "address",
    "city": "city",
    "state": "state",
    "zipCode": "zip_code",
    "country": "country",
    "paymentMethod": "payment_method",
}


def _order_line(item: dict) -> dict:
    return {
        "product_id": item.get("product_id"),
        "name": item.get("name"),
        "quantity": item.get("quantity"),
        "price": item.get("price"),
        "seller_id": item.get("admin_id"),
        "store_name": item.get("store_name"),
        "size": item.get("size"),
    }


class DomainOrderSink(OrderSink):
    """Records orders in the ordering domain through the PlaceOrder command."""

    def submit(self, payload: dict) -> SubmissionResult:
        try:
            details = payload.get("customer_details") or {}
            date = payload.get("date")
            command = PlaceOrder(
                customer=payload.get("customer"),
                total=payload.get("total"),
                currency=payload.get("currency") or "USD",
                customer_details=json.dumps(
                    {internal: details.get(external) for external, internal in _CUSTOMER_DETAIL_KEYS.items()}
                ),
                items=json.dumps([_order_line(item) for item in payload.get("items") or []]),
                payment_reference=payload.get("payment_reference"),
                date=datetime.fromisoformat(date) if isinstance(date, str) else date,
            )
            order_id = current_domain.process(command, asynchronous=False)
        except Exception as exc:  # noqa: BLE001
            logger.warning("order_sink.submit_failed", reason=str(exc))
            return SubmissionResult(success=False, failure_reason=str(exc))

        return SubmissionResult(success=True, order_id=order_id)


class RecordingOrderSink(OrderSink):
    """Keeps submitted payloads in memory; can be told to fail."""

    def __init__(self, should_succeed: bool = True, failure_reason: str = "Order service unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.payloads: list[dict] = []

    def submit(self, payload: dict) -> SubmissionResult:
        self.payloads.append(payload)
        if not self.should_succeed:
            return SubmissionResult(success=False, failure_reason=self.failure_reason)
        return SubmissionResult(success=True, order_id=f"order-{len(self.payloads)}")

"""Order placement: command and handler."""

import json

from protean import handle
from protean.fields import DateTime, Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class PlaceOrder:
    customer = String(required=True, max_length=255, sanitize=False)
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD", sanitize=False)
    customer_details = Text(required=True, sanitize=False)  # JSON: CustomerDetails dict
    items = Text(required=True, sanitize=False)  # JSON: list of order line dicts
    payment_reference = String(max_length=255, sanitize=False)
    date = DateTime()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        customer_details = (
            json.loads(command.customer_details)
            if isinstance(command.customer_details, str)
            else command.customer_details
        )

        order = Order.place(
            customer=command.customer,
            total=command.total,
            customer_details=customer_details,
            items_data=items_data,
            currency=command.currency or "USD",
            payment_reference=command.payment_reference,
            date=command.date,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)

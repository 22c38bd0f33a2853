"""Order aggregate: the record of a paid checkout.

An order is created exactly once, when the payment widget confirms capture,
and is immutable afterwards except for its status. Each line keeps the seller
that listed the product so every seller can see the orders that concern them.

State Machine (4 states):
    PENDING → DELIVERED → REFUNDED
    PENDING → CANCELLED → REFUNDED
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    ValueObject,
)

from ordering.cart.pricing import to_decimal, to_money
from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: {OrderStatus.REFUNDED},
    OrderStatus.CANCELLED: {OrderStatus.REFUNDED},
    OrderStatus.REFUNDED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerDetails:
    """Contact and delivery details captured from the checkout form.

    Stored on the order as given; later changes elsewhere never reach it.
    """

    first_name = String(required=True, max_length=100, sanitize=False)
    last_name = String(max_length=100, sanitize=False)
    email = String(max_length=254, sanitize=False)
    phone_number = String(max_length=30, sanitize=False)
    address = String(required=True, max_length=255, sanitize=False)
    city = String(required=True, max_length=100, sanitize=False)
    state = String(max_length=100, sanitize=False)
    zip_code = String(required=True, max_length=20, sanitize=False)
    country = String(required=True, max_length=100, sanitize=False)
    payment_method = String(max_length=50, default="PayPal", sanitize=False)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A snapshot of one cart line at the moment of purchase.

    ``price`` is the effective (discounted) unit price that was charged.
    """

    product_id = Identifier()
    name = String(required=True, max_length=255, sanitize=False)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    seller_id = Identifier(required=True)
    store_name = String(max_length=255, sanitize=False)
    size = String(max_length=20, sanitize=False)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer = String(required=True, max_length=255, sanitize=False)
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD", sanitize=False)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    date = DateTime(required=True)
    customer_details = ValueObject(CustomerDetails, required=True)
    items = HasMany(OrderLine)
    payment_reference = String(max_length=255, sanitize=False)
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer,
        total,
        customer_details,
        items_data,
        currency="USD",
        payment_reference=None,
        date=None,
    ):
        """Record a paid order.

        Args:
            customer: Display name of the buyer.
            total: Amount captured by the payment widget.
            customer_details: Dict matching ``CustomerDetails``.
            items_data: List of dicts with product_id, name, quantity, price,
                        seller_id, store_name and size.
        """
        if not items_data:
            raise ValidationError({"items": ["An order needs at least one item"]})

        lines = [
            OrderLine(
                product_id=item.get("product_id"),
                name=item.get("name"),
                quantity=item.get("quantity"),
                price=item.get("price"),
                seller_id=item.get("seller_id"),
                store_name=item.get("store_name"),
                size=item.get("size"),
            )
            for item in items_data
        ]

        lines_total = to_money(sum((to_decimal(line.price) * line.quantity for line in lines), to_decimal(0)))
        if lines_total != to_money(total):
            raise ValidationError({"total": [f"Order total {total} does not match its items ({lines_total})"]})

        now = datetime.now(UTC)
        order = cls(
            customer=customer,
            total=total,
            currency=currency,
            status=OrderStatus.PENDING.value,
            date=date or now,
            customer_details=CustomerDetails(**customer_details),
            payment_reference=payment_reference,
            updated_at=now,
        )
        for line in lines:
            order.add_items(line)

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer=customer,
                total=total,
                currency=currency,
                item_count=len(lines),
                seller_ids=json.dumps(sorted(order.seller_ids())),
                placed_at=order.date,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def seller_ids(self) -> set[str]:
        return {str(line.seller_id) for line in self.items}

    def involves_seller(self, seller_id) -> bool:
        return str(seller_id) in self.seller_ids()

    def lines_for_seller(self, seller_id) -> list:
        return [line for line in self.items if str(line.seller_id) == str(seller_id)]

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def change_status(self, new_status, changed_by=None):
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        self._assert_can_transition(target)

        previous = self.status
        self.status = target.value
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_by=changed_by,
                changed_at=now,
            )
        )

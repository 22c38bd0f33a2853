"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A buyer's captured payment was recorded as an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer = String(required=True, sanitize=False)
    total = Float(required=True)
    currency = String(default="USD", sanitize=False)
    item_count = Integer(required=True)
    seller_ids = Text(required=True, sanitize=False)  # JSON: list of seller ids with a line in the order
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """A seller moved the order to a new status."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True, sanitize=False)
    new_status = String(required=True, sanitize=False)
    changed_by = Identifier()
    changed_at = DateTime(required=True)

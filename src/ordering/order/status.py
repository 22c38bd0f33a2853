"""Seller-facing order status updates: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20, sanitize=False)
    seller_id = Identifier()


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)

        # A seller may only touch orders that contain one of their products
        if command.seller_id and not order.involves_seller(command.seller_id):
            raise ValidationError({"seller_id": ["Order has no items from this seller"]})

        order.change_status(command.status, changed_by=command.seller_id)
        repo.add(order)

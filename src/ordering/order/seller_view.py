"""Orders as a seller sees them.

An order belongs to every seller with at least one line in it. Pending orders
come first; within each group the newest order leads.
"""

from protean.utils.globals import current_domain

from ordering.order.order import Order, OrderStatus


def orders_for_seller(seller_id) -> list[Order]:
    repo = current_domain.repository_for(Order)
    orders = [order for order in repo._dao.query.limit(None).all().items if order.involves_seller(seller_id)]

    orders.sort(key=lambda order: order.date, reverse=True)
    orders.sort(key=lambda order: order.status != OrderStatus.PENDING.value)
    return orders


def seller_order_view(order: Order, seller_id) -> dict:
    """Flatten an order for a seller's order table, keeping only their lines."""
    details = order.customer_details
    return {
        "order_id": str(order.id),
        "date": order.date.isoformat() if order.date else None,
        "status": order.status,
        "total": order.total,
        "currency": order.currency,
        "customer": order.customer,
        "contact": {"email": details.email, "phone_number": details.phone_number},
        "address": {
            "address": details.address,
            "city": details.city,
            "state": details.state,
            "zip_code": details.zip_code,
            "country": details.country,
        },
        "payment_method": details.payment_method,
        "items": [
            {
                "product_id": str(line.product_id) if line.product_id else None,
                "name": line.name,
                "quantity": line.quantity,
                "price": line.price,
                "size": line.size,
            }
            for line in order.lines_for_seller(seller_id)
        ],
    }

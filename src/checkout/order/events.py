"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Order")
class OrderPlaced:
    """A cart and shipping snapshot were committed as an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    payment_method = String(required=True)
    estimated_delivery = String(required=True)
    placed_at = DateTime(required=True)


@checkout.event(part_of="Order")
class CancellationRequested:
    """The customer asked to cancel and was shown the refund amount."""

    __version__ = 1

    order_id = Identifier(required=True)
    refund_amount = Float(required=True)
    requested_at = DateTime(required=True)


@checkout.event(part_of="Order")
class CancellationWithdrawn:
    """The customer decided to keep the order."""

    __version__ = 1

    order_id = Identifier(required=True)

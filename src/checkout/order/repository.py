"""Repository for the Order aggregate — the customer's order ledger."""

from protean.exceptions import ObjectNotFoundError

from checkout.domain import checkout
from checkout.order.order import Order


@checkout.repository(part_of=Order)
class OrderRepository:
    def for_customer(self, customer_id) -> list[Order]:
        """Every order of the customer, newest first; same-instant orders keep insertion order."""
        orders = self._dao.query.filter(customer_id=str(customer_id)).limit(None).all().items
        by_insertion = sorted(orders, key=lambda order: order.position or 0)
        return sorted(by_insertion, key=lambda order: order.placed_at, reverse=True)

    def find_for_customer(self, order_id, customer_id) -> Order | None:
        """The order if it exists and belongs to the customer."""
        try:
            order = self.get(order_id)
        except ObjectNotFoundError:
            return None
        if str(order.customer_id) != str(customer_id):
            return None
        return order

    def next_position(self, customer_id) -> int:
        orders = self._dao.query.filter(customer_id=str(customer_id)).limit(None).all().items
        return max((order.position or 0 for order in orders), default=0) + 1

    def remove(self, order: Order) -> None:
        self._dao.delete(order)

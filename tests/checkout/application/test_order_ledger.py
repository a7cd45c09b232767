"""Application tests for reading the customer's order ledger."""

from datetime import UTC, datetime, timedelta

from checkout.order.order import Order
from protean import current_domain

SHIPPING = {
    "first_name": "Maria",
    "last_name": "Santos",
    "email": "maria@example.ph",
    "street": "Barangay San Roque",
    "city": "Quezon City",
    "province": "Metro Manila",
    "zip_code": "1100",
}


def _store(order_id, placed_at, customer_id="cust-001"):
    repo = current_domain.repository_for(Order)
    order = Order.place(
        customer_id=customer_id,
        lines=[{"cart_id": f"{order_id}-line", "artifact_id": "art-001", "name": "Jar", "value": 10.0, "quantity": 1}],
        shipping=SHIPPING,
        payment_method="Maya",
        order_id=order_id,
        placed_at=placed_at,
        position=repo.next_position(customer_id),
    )
    repo.add(order)


class TestForCustomer:
    def test_newest_first(self):
        base = datetime(2026, 10, 1, tzinfo=UTC)
        _store("PH-old", base)
        _store("PH-new", base + timedelta(days=2))
        _store("PH-mid", base + timedelta(days=1))

        orders = current_domain.repository_for(Order).for_customer("cust-001")
        assert [order.order_id for order in orders] == ["PH-new", "PH-mid", "PH-old"]

    def test_ties_keep_insertion_order(self):
        same_instant = datetime(2026, 10, 1, 12, 0, tzinfo=UTC)
        _store("PH-first", same_instant)
        _store("PH-second", same_instant)
        _store("PH-third", same_instant)

        orders = current_domain.repository_for(Order).for_customer("cust-001")
        assert [order.order_id for order in orders] == ["PH-first", "PH-second", "PH-third"]

    def test_only_the_customers_orders(self):
        now = datetime.now(UTC)
        _store("PH-mine", now, customer_id="cust-001")
        _store("PH-theirs", now, customer_id="cust-002")

        orders = current_domain.repository_for(Order).for_customer("cust-001")
        assert [order.order_id for order in orders] == ["PH-mine"]

    def test_empty_ledger(self):
        assert current_domain.repository_for(Order).for_customer("cust-nobody") == []


class TestNextPosition:
    def test_positions_increase_per_customer(self):
        repo = current_domain.repository_for(Order)
        assert repo.next_position("cust-001") == 1

        _store("PH-1", datetime.now(UTC))
        _store("PH-2", datetime.now(UTC))

        assert repo.next_position("cust-001") == 3
        assert repo.next_position("cust-002") == 1


class TestLargeLedger:
    def test_lists_every_order_beyond_a_hundred(self):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        for index in range(105):
            _store(f"PH-{index:03d}", base + timedelta(minutes=index))

        orders = current_domain.repository_for(Order).for_customer("cust-001")

        assert len(orders) == 105
        assert orders[0].order_id == "PH-104"
        assert orders[-1].order_id == "PH-000"

    def test_positions_keep_growing_past_a_hundred(self):
        now = datetime.now(UTC)
        for index in range(105):
            _store(f"PH-{index:03d}", now)

        repo = current_domain.repository_for(Order)
        assert repo.next_position("cust-001") == 106
        assert [order.order_id for order in repo.for_customer("cust-001")][-1] == "PH-104"

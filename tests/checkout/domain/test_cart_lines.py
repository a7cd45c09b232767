"""Tests for cart line management on the ShoppingCart aggregate."""

import pytest
from checkout.cart.cart import CheckoutStep, ShoppingCart
from checkout.cart.events import CartLineAdded, CartLineRemoved, CartQuantityUpdated
from protean.exceptions import ValidationError


def _make_cart():
    return ShoppingCart.start("sess-001")


def _add(cart, artifact_id="art-001", name="Manunggul Jar", value=10000.0, **kwargs):
    return cart.add_artifact(artifact_id=artifact_id, name=name, value=value, **kwargs)


class TestStartCart:
    def test_new_cart_is_empty(self):
        cart = _make_cart()
        assert cart.item_count() == 0
        assert cart.total() == 0
        assert cart.step == CheckoutStep.CART.value
        assert cart.shipping is None

    def test_new_cart_has_no_added_artifacts(self):
        assert _make_cart().added_artifact_ids == frozenset()


class TestAddArtifact:
    def test_add_creates_line_with_quantity_one(self):
        cart = _make_cart()
        line = _add(cart, period="Neolithic", origin="Palawan")

        assert cart.item_count() == 1
        assert line.quantity == 1
        assert line.artifact_id == "art-001"
        assert line.period == "Neolithic"
        assert line.origin == "Palawan"

    def test_cart_id_starts_with_artifact_id(self):
        cart = _make_cart()
        line = _add(cart)
        assert str(line.cart_id).startswith("art-001-")

    def test_adding_same_artifact_twice_creates_distinct_lines(self):
        cart = _make_cart()
        first = _add(cart)
        second = _add(cart)

        assert cart.item_count() == 2
        assert first.cart_id != second.cart_id

    def test_add_raises_event(self):
        cart = _make_cart()
        line = _add(cart)

        added = [e for e in cart._events if isinstance(e, CartLineAdded)]
        assert len(added) == 1
        assert added[0].cart_id == str(line.cart_id)
        assert added[0].artifact_id == "art-001"
        assert added[0].value == 10000.0

    def test_revoked_artifact_is_rejected(self):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc:
            _add(cart, revoked=True)

        assert "artifact_id" in exc.value.messages
        assert cart.item_count() == 0

    def test_artifact_without_id_is_rejected(self):
        cart = _make_cart()
        with pytest.raises(ValidationError):
            _add(cart, artifact_id="")

    def test_negative_value_is_rejected(self):
        cart = _make_cart()
        with pytest.raises(ValidationError):
            _add(cart, value=-1.0)

    def test_lines_keep_insertion_order(self):
        cart = _make_cart()
        _add(cart, "art-001")
        _add(cart, "art-002")
        _add(cart, "art-003")

        assert [line.artifact_id for line in cart.ordered_lines] == ["art-001", "art-002", "art-003"]

    def test_added_artifact_ids(self):
        cart = _make_cart()
        _add(cart, "art-001")
        _add(cart, "art-002")
        _add(cart, "art-001")

        assert cart.added_artifact_ids == frozenset({"art-001", "art-002"})


class TestRemoveLine:
    def test_add_then_remove_restores_previous_state(self):
        cart = _make_cart()
        _add(cart, "art-001", value=250.0)
        before_lines = cart.snapshot_lines()
        before_total = cart.total()

        line = _add(cart, "art-002", value=999.0)
        cart.remove_line(line.cart_id)

        assert cart.snapshot_lines() == before_lines
        assert cart.total() == before_total

    def test_remove_raises_event(self):
        cart = _make_cart()
        line = _add(cart)
        cart._events.clear()

        assert cart.remove_line(line.cart_id) is True
        assert len(cart._events) == 1
        assert isinstance(cart._events[0], CartLineRemoved)

    def test_remove_unknown_line_is_a_noop(self):
        cart = _make_cart()
        _add(cart)
        cart._events.clear()

        assert cart.remove_line("does-not-exist") is False
        assert cart.item_count() == 1
        assert cart._events == []

    def test_remove_from_empty_cart(self):
        cart = _make_cart()
        assert cart.remove_line("art-001-1") is False


class TestSetQuantity:
    def test_set_quantity_updates_total(self):
        cart = _make_cart()
        line = _add(cart, value=10000.0)

        cart.set_quantity(line.cart_id, 3)

        assert cart.total() == 30000.0

    def test_set_quantity_raises_event(self):
        cart = _make_cart()
        line = _add(cart)
        cart._events.clear()

        cart.set_quantity(line.cart_id, 4)

        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 4

    def test_same_quantity_raises_no_event(self):
        cart = _make_cart()
        line = _add(cart)
        cart._events.clear()

        cart.set_quantity(line.cart_id, 1)
        assert cart._events == []

    def test_set_quantity_keeps_position(self):
        cart = _make_cart()
        _add(cart, "art-001")
        middle = _add(cart, "art-002")
        _add(cart, "art-003")

        cart.set_quantity(middle.cart_id, 5)

        assert [line.artifact_id for line in cart.ordered_lines] == ["art-001", "art-002", "art-003"]
        assert cart.ordered_lines[1].quantity == 5

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_removes_line(self, quantity):
        cart = _make_cart()
        keep = _add(cart, "art-001")
        drop = _add(cart, "art-002")

        cart.set_quantity(drop.cart_id, quantity)

        assert [line.cart_id for line in cart.lines] == [keep.cart_id]

    def test_zero_quantity_matches_remove(self):
        removed = _make_cart()
        zeroed = _make_cart()
        for cart in (removed, zeroed):
            _add(cart, "art-001", value=100.0)
            _add(cart, "art-002", value=200.0)

        removed.remove_line(removed.ordered_lines[1].cart_id)
        zeroed.set_quantity(zeroed.ordered_lines[1].cart_id, 0)

        assert [line.artifact_id for line in removed.ordered_lines] == [
            line.artifact_id for line in zeroed.ordered_lines
        ]
        assert removed.total() == zeroed.total()

    def test_set_quantity_on_unknown_line_is_a_noop(self):
        cart = _make_cart()
        _add(cart)
        assert cart.set_quantity("missing", 3) is False
        assert cart.total() == 10000.0


class TestTotal:
    def test_total_follows_every_change(self):
        cart = _make_cart()
        first = _add(cart, "art-001", value=150.0)
        second = _add(cart, "art-002", value=40.0)
        assert cart.total() == 190.0

        cart.set_quantity(first.cart_id, 2)
        assert cart.total() == 340.0

        cart.remove_line(second.cart_id)
        assert cart.total() == 300.0

        third = _add(cart, "art-003", value=12.5)
        cart.set_quantity(third.cart_id, 4)
        assert cart.total() == sum(line.value * line.quantity for line in cart.lines)
        assert cart.total() == 350.0

    def test_item_count_counts_lines(self):
        cart = _make_cart()
        line = _add(cart)
        _add(cart, "art-002")
        cart.set_quantity(line.cart_id, 5)
        assert cart.item_count() == 2

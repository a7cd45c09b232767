"""Shopping Cart aggregate (CQRS) — session-scoped cart that becomes an Order at checkout.

One cart exists per browsing session. Each add-to-cart action creates a new
line with its own ``cart_id``, even when the same artifact is added twice, so
lines are never merged. The cart also carries the checkout step the session
is on and the shipping address captured at the shipping step.

Checkout steps:
    CART -> SHIPPING -> PAYMENT -> (order placed) -> CART
"""

import json
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

import structlog
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from checkout.cart.events import (
    CartCleared,
    CartLineAdded,
    CartLineRemoved,
    CartQuantityUpdated,
    CartRestored,
    CheckoutStepChanged,
    ShippingCaptured,
)
from checkout.cart.shipping import (
    DEFAULT_COUNTRY,
    REQUIRED_SHIPPING_FIELDS,
    ShippingAddress,
    is_complete,
    missing_fields,
)
from checkout.domain import checkout

logger = structlog.get_logger(__name__)


class CheckoutStep(Enum):
    CART = "Cart"
    SHIPPING = "Shipping"
    PAYMENT = "Payment"


def new_cart_id(artifact_id) -> str:
    """Line identifier: artifact id, epoch millis and a random suffix.

    The suffix keeps ids distinct when the same artifact is added twice
    within one millisecond.
    """
    millis = int(datetime.now(UTC).timestamp() * 1000)
    return f"{artifact_id}-{millis}-{uuid4().hex[:6]}"


def parse_stored_lines(raw):
    """Decode a stored cart snapshot.

    Returns ``(entries, corrupt)``. Anything that is not a JSON array of
    objects is reported as corrupt with no entries.
    """
    if raw is None or raw == "":
        return [], False

    data = raw
    if isinstance(raw, (str, bytes)):
        try:
            data = json.loads(raw)
        except ValueError:
            return [], True

    if not isinstance(data, list) or not all(isinstance(entry, dict) for entry in data):
        return [], True
    return data, False


@checkout.entity(part_of="ShoppingCart")
class CartLine:
    """An artifact the shopper intends to buy, with its display fields copied in."""

    cart_id = Identifier(identifier=True)
    artifact_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    period = String(max_length=100)
    origin = String(max_length=100)
    value = Float(required=True, min_value=0.0)
    image_url = String(max_length=2048)
    quantity = Integer(required=True, min_value=1)
    position = Integer(default=0)
    added_at = DateTime()

    @property
    def subtotal(self) -> float:
        return self.value * self.quantity

    def snapshot(self) -> dict:
        return {
            "cart_id": str(self.cart_id),
            "artifact_id": str(self.artifact_id),
            "name": self.name,
            "period": self.period,
            "origin": self.origin,
            "value": self.value,
            "image_url": self.image_url,
            "quantity": self.quantity,
        }


@checkout.aggregate
class ShoppingCart:
    session_id = Identifier(identifier=True)
    lines = HasMany(CartLine)
    shipping = ValueObject(ShippingAddress)
    step = String(choices=CheckoutStep, default=CheckoutStep.CART.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def payment_step_requires_complete_shipping(self):
        if self.step == CheckoutStep.PAYMENT.value and not is_complete(self.shipping):
            raise ValidationError({"shipping": ["A complete shipping address is required before payment"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def start(cls, session_id):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            step=CheckoutStep.CART.value,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_lines(self) -> list[CartLine]:
        """Lines in the order they were added."""
        return sorted(self.lines, key=lambda line: line.position or 0)

    @property
    def added_artifact_ids(self) -> frozenset[str]:
        """Artifacts currently in the cart, for marking them on the browse page."""
        return frozenset(str(line.artifact_id) for line in self.lines)

    def total(self) -> float:
        return sum(line.value * line.quantity for line in self.lines)

    def item_count(self) -> int:
        return len(self.lines)

    def snapshot_lines(self) -> list[dict]:
        """Detached copies of the lines, safe to keep after the cart changes."""
        return [line.snapshot() for line in self.ordered_lines]

    def _find_line(self, cart_id):
        return next((line for line in self.lines if str(line.cart_id) == str(cart_id)), None)

    def _next_position(self) -> int:
        return max((line.position or 0 for line in self.lines), default=0) + 1

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_artifact(
        self,
        artifact_id,
        name,
        value,
        period=None,
        origin=None,
        image_url=None,
        revoked=False,
    ):
        """Append a new line with quantity 1 and return it."""
        if revoked:
            raise ValidationError({"artifact_id": ["Revoked artifacts cannot be purchased"]})
        if not artifact_id:
            raise ValidationError({"artifact_id": ["Artifact id is required"]})

        now = datetime.now(UTC)
        line = CartLine(
            cart_id=new_cart_id(artifact_id),
            artifact_id=artifact_id,
            name=name,
            period=period,
            origin=origin,
            value=value,
            image_url=image_url,
            quantity=1,
            position=self._next_position(),
            added_at=now,
        )
        self.add_lines(line)
        self.updated_at = now

        self.raise_(
            CartLineAdded(
                session_id=str(self.session_id),
                cart_id=str(line.cart_id),
                artifact_id=str(artifact_id),
                name=name,
                value=value,
            )
        )
        return line

    def remove_line(self, cart_id):
        """Remove a line. Unknown ids are ignored."""
        line = self._find_line(cart_id)
        if line is None:
            return False

        self.remove_lines(line)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                session_id=str(self.session_id),
                cart_id=str(cart_id),
            )
        )
        return True

    def set_quantity(self, cart_id, quantity):
        """Replace a line's quantity in place; zero or less removes the line."""
        if quantity <= 0:
            return self.remove_line(cart_id)

        line = self._find_line(cart_id)
        if line is None:
            return False

        previous_quantity = line.quantity
        if previous_quantity == quantity:
            return True

        line.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                session_id=str(self.session_id),
                cart_id=str(cart_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return True

    def restore(self, raw):
        """Replace the lines with a snapshot kept by the browser.

        Unreadable snapshots leave the cart empty. Entries that cannot be
        turned into a valid line (missing id, non-positive quantity, revoked
        artifact) are dropped.
        """
        entries, corrupt = parse_stored_lines(raw)
        if corrupt:
            logger.warning("Discarding unreadable cart snapshot", session_id=str(self.session_id))

        for line in list(self.lines):
            self.remove_lines(line)

        discarded = 0
        seen = set()
        for entry in entries:
            line = self._line_from_entry(entry, seen)
            if line is None:
                discarded += 1
                continue
            seen.add(str(line.cart_id))
            self.add_lines(line)

        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartRestored(
                session_id=str(self.session_id),
                line_count=len(self.lines),
                discarded=discarded,
            )
        )

    def _line_from_entry(self, entry, seen):
        artifact_id = entry.get("artifact_id") or entry.get("id")
        if not artifact_id or entry.get("revoked"):
            return None
        try:
            quantity = int(entry.get("quantity", 1))
            value = float(entry.get("value"))
        except (TypeError, ValueError):
            return None
        if quantity <= 0 or value < 0 or not entry.get("name"):
            return None

        cart_id = entry.get("cart_id") or entry.get("cartId")
        if not cart_id or str(cart_id) in seen:
            cart_id = new_cart_id(artifact_id)

        try:
            return CartLine(
                cart_id=str(cart_id),
                artifact_id=str(artifact_id),
                name=entry["name"],
                period=entry.get("period"),
                origin=entry.get("origin"),
                value=value,
                image_url=entry.get("image_url") or entry.get("imageUrl"),
                quantity=quantity,
                position=self._next_position(),
                added_at=datetime.now(UTC),
            )
        except ValidationError:
            return None

    # -------------------------------------------------------------------
    # Checkout steps
    # -------------------------------------------------------------------
    def _change_step(self, new_step):
        previous = CheckoutStep(self.step)
        self.step = new_step.value
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CheckoutStepChanged(
                session_id=str(self.session_id),
                previous_step=previous.value,
                new_step=new_step.value,
            )
        )

    def proceed_to_shipping(self):
        """Leave the cart for the shipping form. The cart must not be empty."""
        if not self.lines:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})
        if CheckoutStep(self.step) != CheckoutStep.CART:
            return
        self._change_step(CheckoutStep.SHIPPING)

    def return_to_cart(self):
        """Go back to the cart. Captured shipping data is kept."""
        if CheckoutStep(self.step) == CheckoutStep.CART:
            return
        self._change_step(CheckoutStep.CART)

    def submit_shipping(self, address):
        """Record a complete shipping address and move on to payment."""
        if CheckoutStep(self.step) == CheckoutStep.CART:
            raise ValidationError({"step": ["Proceed to checkout before entering shipping details"]})
        if not self.lines:
            raise ValidationError({"cart": ["Cannot check out an empty cart"]})

        missing = missing_fields(address)
        if missing:
            raise ValidationError({field_name: ["This field is required"] for field_name in missing})

        values = address if isinstance(address, Mapping) else address.to_dict()
        cleaned = {field_name: values[field_name].strip() for field_name in REQUIRED_SHIPPING_FIELDS}
        country = values.get("country")
        cleaned["country"] = country.strip() if isinstance(country, str) and country.strip() else DEFAULT_COUNTRY

        self.shipping = ShippingAddress(**cleaned)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ShippingCaptured(
                session_id=str(self.session_id),
                shipping=json.dumps(cleaned),
            )
        )

        if CheckoutStep(self.step) != CheckoutStep.PAYMENT:
            self._change_step(CheckoutStep.PAYMENT)

    def assert_ready_to_place_order(self):
        if not self.lines:
            raise ValidationError({"cart": ["Cannot place an order for an empty cart"]})
        if CheckoutStep(self.step) != CheckoutStep.PAYMENT:
            raise ValidationError({"step": ["Complete the shipping step before paying"]})
        if not is_complete(self.shipping):
            raise ValidationError({"shipping": ["A complete shipping address is required before payment"]})

    def clear(self, order_id):
        """Empty the cart after its contents were recorded as an order."""
        self.step = CheckoutStep.CART.value
        for line in list(self.lines):
            self.remove_lines(line)
        self.shipping = None
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                session_id=str(self.session_id),
                order_id=str(order_id),
            )
        )

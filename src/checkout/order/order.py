"""Order aggregate (CQRS) — a placed order in the customer's ledger.

An Order is a frozen snapshot of the cart and shipping address taken at
payment confirmation. Items, total and the delivery estimate are computed
once at placement and never recomputed.

Cancellation is two-phase: ``request_cancellation`` shows the refund amount
and hands out a token, ``confirm_cancellation`` checks the token and
produces the receipt. The ledger then drops the order entirely; no
"cancelled" status is kept.
"""

import copy
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from checkout.cart.shipping import ShippingAddress
from checkout.domain import checkout
from checkout.order.events import CancellationRequested, CancellationWithdrawn, OrderPlaced
from checkout.payment.port import PaymentMethod

DELIVERY_DAYS = 5


def new_order_id(now: datetime | None = None) -> str:
    now = now or datetime.now(UTC)
    return f"PH-{int(now.timestamp() * 1000)}-{uuid4().hex[:6]}"


def format_delivery_date(placed_at: datetime, days: int = DELIVERY_DAYS) -> str:
    """Long-form date such as ``October 24, 2026``."""
    delivery = placed_at + timedelta(days=days)
    return f"{delivery:%B} {delivery.day}, {delivery.year}"


@dataclass(frozen=True)
class CancellationQuote:
    """What the customer sees before confirming a cancellation."""

    order_id: str
    item_count: int
    refund_amount: float
    placed_at: datetime
    token: str


@dataclass(frozen=True)
class CancellationReceipt:
    """Point-in-time proof of a cancellation. Returned to the caller, never stored."""

    order_id: str
    refund_amount: float
    cancelled_at: datetime


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@checkout.entity(part_of="Order")
class OrderLine:
    """A cart line as it was when the order was placed."""

    cart_id = String(required=True, max_length=255)
    artifact_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    period = String(max_length=100)
    origin = String(max_length=100)
    value = Float(required=True, min_value=0.0)
    image_url = String(max_length=2048)
    quantity = Integer(required=True, min_value=1)

    @property
    def subtotal(self) -> float:
        return self.value * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@checkout.aggregate
class Order:
    order_id = Identifier(identifier=True)
    customer_id = Identifier(required=True)
    items = HasMany(OrderLine)
    total = Float(required=True, min_value=0.0)
    shipping = ValueObject(ShippingAddress)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_reference = String(max_length=255)
    estimated_delivery = String(max_length=50)
    placed_at = DateTime(required=True)
    position = Integer(default=0)  # Insertion order within the customer's ledger
    cancellation_token = String(max_length=64)
    cancellation_requested_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        lines,
        shipping,
        payment_method,
        order_id=None,
        payment_reference=None,
        position=0,
        placed_at=None,
        delivery_days=DELIVERY_DAYS,
    ):
        """Create an order from cart line snapshots and a shipping address.

        Args:
            customer_id: Owner of the ledger the order is appended to.
            lines: List of dicts with cart_id, artifact_id, name, period,
                   origin, value, image_url, quantity.
            shipping: Dict with the ShippingAddress fields.
            payment_method: A PaymentMethod or its value.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        placed_at = placed_at or datetime.now(UTC)
        method = PaymentMethod(payment_method)
        lines = copy.deepcopy(lines)
        total = sum(line["value"] * line["quantity"] for line in lines)

        order = cls(
            order_id=order_id or new_order_id(placed_at),
            customer_id=customer_id,
            total=total,
            shipping=ShippingAddress(**shipping),
            payment_method=method.value,
            payment_reference=payment_reference,
            estimated_delivery=format_delivery_date(placed_at, delivery_days),
            placed_at=placed_at,
            position=position,
        )
        for line in lines:
            order.add_items(OrderLine(**line))

        order.raise_(
            OrderPlaced(
                order_id=str(order.order_id),
                customer_id=str(customer_id),
                item_count=len(lines),
                total=total,
                payment_method=method.value,
                estimated_delivery=order.estimated_delivery,
                placed_at=placed_at,
            )
        )
        return order

    def item_count(self) -> int:
        return len(self.items)

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def request_cancellation(self, now=None) -> CancellationQuote:
        """First phase: surface the refund and issue a confirmation token."""
        now = now or datetime.now(UTC)
        self.cancellation_token = uuid4().hex
        self.cancellation_requested_at = now

        self.raise_(
            CancellationRequested(
                order_id=str(self.order_id),
                refund_amount=self.total,
                requested_at=now,
            )
        )
        return CancellationQuote(
            order_id=str(self.order_id),
            item_count=self.item_count(),
            refund_amount=self.total,
            placed_at=self.placed_at,
            token=self.cancellation_token,
        )

    def withdraw_cancellation(self):
        """Keep the order. Returns False when nothing was pending."""
        if not self.cancellation_token:
            return False

        self.cancellation_token = None
        self.cancellation_requested_at = None
        self.raise_(CancellationWithdrawn(order_id=str(self.order_id)))
        return True

    def confirm_cancellation(self, token, now=None) -> CancellationReceipt:
        """Second phase: validate the token and produce the receipt."""
        if not self.cancellation_token:
            raise ValidationError({"cancellation": ["Cancellation must be requested before it can be confirmed"]})
        if token != self.cancellation_token:
            raise ValidationError({"token": ["Cancellation token does not match the pending request"]})

        return CancellationReceipt(
            order_id=str(self.order_id),
            refund_amount=self.total,
            cancelled_at=now or datetime.now(UTC),
        )

"""Order placement — turn the session cart into an order in one unit of work."""

from dataclasses import dataclass
from datetime import datetime

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from checkout.cart.cart import ShoppingCart
from checkout.domain import checkout
from checkout.order.order import Order, new_order_id
from checkout.payment import get_processor
from checkout.payment.port import PaymentMethod
from checkout.settings import CheckoutSettings

logger = structlog.get_logger(__name__)


@checkout.command(part_of="Order")
class PlaceOrder:
    session_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    payment_method = String(required=True, choices=PaymentMethod)


@dataclass(frozen=True)
class OrderConfirmation:
    """Shown on the confirmation screen right after payment."""

    order_id: str
    total: float
    item_count: int
    payment_method: str
    estimated_delivery: str
    placed_at: datetime


@checkout.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.for_session(command.session_id)
        cart.assert_ready_to_place_order()

        try:
            method = PaymentMethod(command.payment_method)
        except ValueError:
            raise ValidationError({"payment_method": ["Select a supported payment method"]})

        order_id = new_order_id()
        total = cart.total()

        result = get_processor().charge(amount=total, payment_method=method, reference=order_id)
        if not result.success:
            logger.warning(
                "Payment declined",
                session_id=str(command.session_id),
                payment_method=method.value,
                reason=result.failure_reason,
            )
            raise ValidationError({"payment": [result.failure_reason or "Payment was declined"]})

        order_repo = current_domain.repository_for(Order)
        order = Order.place(
            customer_id=command.customer_id,
            lines=cart.snapshot_lines(),
            shipping=cart.shipping.to_dict(),
            payment_method=method,
            order_id=order_id,
            payment_reference=result.transaction_id,
            position=order_repo.next_position(command.customer_id),
            delivery_days=CheckoutSettings().delivery_days,
        )
        order_repo.add(order)

        cart.clear(order.order_id)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.order_id),
            customer_id=str(command.customer_id),
            total=order.total,
            payment_method=method.value,
        )
        return OrderConfirmation(
            order_id=str(order.order_id),
            total=order.total,
            item_count=order.item_count(),
            payment_method=order.payment_method,
            estimated_delivery=order.estimated_delivery,
            placed_at=order.placed_at,
        )

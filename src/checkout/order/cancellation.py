"""Two-phase order cancellation — commands and handler.

Requesting a cancellation shows the refund amount and issues a token.
Confirming with that token removes the order from the ledger and returns a
receipt. Orders that do not exist, or that belong to another customer, are
treated as absent and yield no receipt.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from checkout.domain import checkout
from checkout.order.order import Order

logger = structlog.get_logger(__name__)


@checkout.command(part_of="Order")
class RequestCancellation:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@checkout.command(part_of="Order")
class WithdrawCancellation:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@checkout.command(part_of="Order")
class ConfirmCancellation:
    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    token = String(required=True, max_length=64)


@checkout.command_handler(part_of=Order)
class CancellationHandler:
    @handle(RequestCancellation)
    def request_cancellation(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_for_customer(command.order_id, command.customer_id)
        if order is None:
            return None

        quote = order.request_cancellation()
        repo.add(order)
        return quote

    @handle(WithdrawCancellation)
    def withdraw_cancellation(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_for_customer(command.order_id, command.customer_id)
        if order is None:
            return False

        withdrawn = order.withdraw_cancellation()
        if withdrawn:
            repo.add(order)
        return withdrawn

    @handle(ConfirmCancellation)
    def confirm_cancellation(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.find_for_customer(command.order_id, command.customer_id)
        if order is None:
            logger.info("Cancellation confirmed for unknown order", order_id=str(command.order_id))
            return None

        receipt = order.confirm_cancellation(command.token)
        repo.remove(order)

        logger.info(
            "Order cancelled",
            order_id=receipt.order_id,
            customer_id=str(command.customer_id),
            refund_amount=receipt.refund_amount,
        )
        return receipt

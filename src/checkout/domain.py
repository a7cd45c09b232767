"""Checkout bounded context — Shopping Cart, Order Placement and Order Ledger.

Handles the session cart (CQRS), the shipping and payment steps of checkout,
and the customer's ledger of placed orders with two-phase cancellation.
"""

import structlog
from protean.domain import Domain

checkout = Domain(name="checkout")

logger = structlog.get_logger(__name__)

"""Simulated payment processor.

Stands in for GCash, Maya and cash-on-delivery settlement. It waits a fixed
delay and succeeds, which is what the storefront has always done. Tests and
manual runs can switch it to fail to exercise the rejection path.
"""

import time
from uuid import uuid4

import structlog

from checkout.payment.port import ChargeResult, PaymentMethod, PaymentProcessor

logger = structlog.get_logger(__name__)


class SimulatedPaymentProcessor(PaymentProcessor):
    """Configurable always-succeeds processor."""

    def __init__(self, delay_seconds: float = 0.0) -> None:
        self.delay_seconds = delay_seconds
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment declined") -> None:
        """Configure processor behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def charge(
        self,
        amount: float,
        payment_method: PaymentMethod,
        reference: str,
    ) -> ChargeResult:
        self.calls.append(
            {
                "method": "charge",
                "amount": amount,
                "payment_method": payment_method.value,
                "reference": reference,
            }
        )

        if self.delay_seconds:
            time.sleep(self.delay_seconds)

        if not self.should_succeed:
            logger.info("Simulated charge declined", reference=reference, reason=self.failure_reason)
            return ChargeResult(
                success=False,
                status="failed",
                failure_reason=self.failure_reason,
            )

        # Cash on delivery is collected by the courier; nothing is captured now.
        status = "pending_collection" if payment_method == PaymentMethod.CASH_ON_DELIVERY else "succeeded"
        return ChargeResult(
            success=True,
            transaction_id=f"sim_txn_{uuid4().hex[:12]}",
            status=status,
        )

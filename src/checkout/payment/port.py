"""Payment processor port (abstract interface).

Order placement charges through this contract only, so the simulated
processor used today can be replaced by a real wallet or card integration
without touching the checkout state machine.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class PaymentMethod(Enum):
    GCASH = "GCash"
    MAYA = "Maya"
    CASH_ON_DELIVERY = "Cash on Delivery"


@dataclass(frozen=True)
class ChargeResult:
    """Result of a charge attempt."""

    success: bool
    transaction_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class PaymentProcessor(ABC):
    """Abstract payment processor interface."""

    @abstractmethod
    def charge(
        self,
        amount: float,
        payment_method: PaymentMethod,
        reference: str,
    ) -> ChargeResult:
        """Collect ``amount`` with the chosen method. ``reference`` identifies the order."""
        ...

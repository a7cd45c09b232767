"""Payment processor factory.

Provides get_processor() / set_processor() to swap implementations:
- SimulatedPaymentProcessor by default
- any PaymentProcessor adapter for a real wallet integration
"""

from checkout.payment.port import PaymentProcessor
from checkout.payment.simulated import SimulatedPaymentProcessor
from checkout.settings import CheckoutSettings

_current_processor: PaymentProcessor | None = None


def get_processor() -> PaymentProcessor:
    """Return the current payment processor. Defaults to SimulatedPaymentProcessor."""
    global _current_processor
    if _current_processor is None:
        _current_processor = SimulatedPaymentProcessor(delay_seconds=CheckoutSettings().payment_delay_seconds)
    return _current_processor


def set_processor(processor: PaymentProcessor) -> None:
    """Override the active payment processor (useful for tests)."""
    global _current_processor
    _current_processor = processor


def reset_processor() -> None:
    """Reset to the default processor."""
    global _current_processor
    _current_processor = None

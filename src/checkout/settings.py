"""Checkout configuration read from ``CHECKOUT_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckoutSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHECKOUT_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    payment_delay_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Artificial latency of the simulated payment processor.",
    )
    delivery_days: int = Field(
        default=5,
        ge=0,
        description="Days added to the placement date for the delivery estimate.",
    )

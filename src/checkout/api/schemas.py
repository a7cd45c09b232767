"""Pydantic request/response schemas for the Checkout API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingSchema(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    street: str = ""
    city: str = ""
    province: str = ""
    zip_code: str = ""
    country: str | None = None


class CartLineSchema(BaseModel):
    cart_id: str
    artifact_id: str
    name: str
    period: str | None = None
    origin: str | None = None
    value: float
    image_url: str | None = None
    quantity: int
    subtotal: float


class OrderLineSchema(BaseModel):
    cart_id: str
    artifact_id: str
    name: str
    period: str | None = None
    origin: str | None = None
    value: float
    image_url: str | None = None
    quantity: int


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    artifact_id: str
    name: str
    value: float = Field(ge=0)
    period: str | None = None
    origin: str | None = None
    image_url: str | None = None
    revoked: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "artifact_id": "art-001",
                    "name": "Manunggul Jar",
                    "value": 12500.0,
                    "period": "Neolithic",
                    "origin": "Palawan",
                    "image_url": "https://cdn.example.com/manunggul.jpg",
                }
            ]
        }
    }


class SetCartQuantityRequest(BaseModel):
    quantity: int  # Zero or negative removes the line


class RestoreCartRequest(BaseModel):
    lines: Any = None  # JSON text or a decoded list of line objects


# ---------------------------------------------------------------------------
# Checkout Request Schemas
# ---------------------------------------------------------------------------
class ChangeStepRequest(BaseModel):
    step: str


class PlaceOrderRequest(BaseModel):
    payment_method: str

    model_config = {"json_schema_extra": {"examples": [{"payment_method": "GCash"}]}}


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class ConfirmCancellationRequest(BaseModel):
    token: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class CartIdResponse(BaseModel):
    cart_id: str


class StepResponse(BaseModel):
    step: str


class CartResponse(BaseModel):
    session_id: str
    lines: list[CartLineSchema]
    total: float
    item_count: int
    step: str
    shipping: ShippingSchema | None = None
    added_artifact_ids: list[str]


class OrderConfirmationResponse(BaseModel):
    order_id: str
    total: float
    item_count: int
    payment_method: str
    estimated_delivery: str
    placed_at: datetime


class OrderResponse(BaseModel):
    order_id: str
    items: list[OrderLineSchema]
    total: float
    shipping: ShippingSchema | None = None
    placed_at: datetime
    payment_method: str
    payment_reference: str | None = None
    estimated_delivery: str | None = None
    cancellation_pending: bool = False


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


class CancellationQuoteResponse(BaseModel):
    order_id: str
    item_count: int
    refund_amount: float
    placed_at: datetime
    token: str


class CancellationReceiptResponse(BaseModel):
    order_id: str
    refund_amount: float
    cancelled_at: datetime

"""FastAPI routes for the Checkout domain — cart, checkout steps and orders.

Cart and checkout endpoints act on the caller's session cart
(``X-Session-Id``); order endpoints act on the caller's ledger
(``X-Customer-Id``).
"""

import json

from fastapi import APIRouter, Header, HTTPException
from protean.utils.globals import current_domain

from checkout.api.schemas import (
    AddToCartRequest,
    CancellationQuoteResponse,
    CancellationReceiptResponse,
    CartIdResponse,
    CartLineSchema,
    CartResponse,
    ChangeStepRequest,
    ConfirmCancellationRequest,
    OrderConfirmationResponse,
    OrderLineSchema,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    RestoreCartRequest,
    SetCartQuantityRequest,
    ShippingSchema,
    StatusResponse,
    StepResponse,
)
from checkout.cart.cart import ShoppingCart
from checkout.cart.items import AddToCart, RemoveFromCart, RestoreCart, SetCartQuantity
from checkout.cart.steps import ChangeCheckoutStep, SubmitShipping
from checkout.order.cancellation import ConfirmCancellation, RequestCancellation, WithdrawCancellation
from checkout.order.order import Order
from checkout.order.placement import PlaceOrder


def _cart_response(cart) -> CartResponse:
    return CartResponse(
        session_id=str(cart.session_id),
        lines=[
            CartLineSchema(
                cart_id=str(line.cart_id),
                artifact_id=str(line.artifact_id),
                name=line.name,
                period=line.period,
                origin=line.origin,
                value=line.value,
                image_url=line.image_url,
                quantity=line.quantity,
                subtotal=line.subtotal,
            )
            for line in cart.ordered_lines
        ],
        total=cart.total(),
        item_count=cart.item_count(),
        step=cart.step,
        shipping=ShippingSchema(**cart.shipping.to_dict()) if cart.shipping is not None else None,
        added_artifact_ids=sorted(cart.added_artifact_ids),
    )


def _order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.order_id),
        items=[
            OrderLineSchema(
                cart_id=item.cart_id,
                artifact_id=str(item.artifact_id),
                name=item.name,
                period=item.period,
                origin=item.origin,
                value=item.value,
                image_url=item.image_url,
                quantity=item.quantity,
            )
            for item in order.items
        ],
        total=order.total,
        shipping=ShippingSchema(**order.shipping.to_dict()) if order.shipping is not None else None,
        placed_at=order.placed_at,
        payment_method=order.payment_method,
        payment_reference=order.payment_reference,
        estimated_delivery=order.estimated_delivery,
        cancellation_pending=bool(order.cancellation_token),
    )


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(x_session_id: str = Header()) -> CartResponse:
    cart = current_domain.repository_for(ShoppingCart).for_session(x_session_id)
    return _cart_response(cart)


@cart_router.post("/lines", status_code=201, response_model=CartIdResponse)
async def add_to_cart(body: AddToCartRequest, x_session_id: str = Header()) -> CartIdResponse:
    command = AddToCart(
        session_id=x_session_id,
        artifact_id=body.artifact_id,
        name=body.name,
        value=body.value,
        period=body.period,
        origin=body.origin,
        image_url=body.image_url,
        revoked=body.revoked,
    )
    result = current_domain.process(command, asynchronous=False)
    return CartIdResponse(cart_id=result)


@cart_router.put("/lines/{cart_id}", response_model=StatusResponse)
async def set_cart_quantity(cart_id: str, body: SetCartQuantityRequest, x_session_id: str = Header()) -> StatusResponse:
    command = SetCartQuantity(
        session_id=x_session_id,
        cart_id=cart_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.delete("/lines/{cart_id}", response_model=StatusResponse)
async def remove_from_cart(cart_id: str, x_session_id: str = Header()) -> StatusResponse:
    command = RemoveFromCart(
        session_id=x_session_id,
        cart_id=cart_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@cart_router.put("/lines", response_model=CartResponse)
async def restore_cart(body: RestoreCartRequest, x_session_id: str = Header()) -> CartResponse:
    """Replace the cart with a snapshot the browser kept in local storage."""
    lines = body.lines if body.lines is None or isinstance(body.lines, str) else json.dumps(body.lines)
    command = RestoreCart(
        session_id=x_session_id,
        lines=lines,
    )
    current_domain.process(command, asynchronous=False)

    cart = current_domain.repository_for(ShoppingCart).for_session(x_session_id)
    return _cart_response(cart)


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.put("/step", response_model=StepResponse)
async def change_step(body: ChangeStepRequest, x_session_id: str = Header()) -> StepResponse:
    command = ChangeCheckoutStep(
        session_id=x_session_id,
        step=body.step,
    )
    result = current_domain.process(command, asynchronous=False)
    return StepResponse(step=result)


@checkout_router.put("/shipping", response_model=StepResponse)
async def submit_shipping(body: ShippingSchema, x_session_id: str = Header()) -> StepResponse:
    command = SubmitShipping(
        session_id=x_session_id,
        shipping=json.dumps(body.model_dump()),
    )
    result = current_domain.process(command, asynchronous=False)
    return StepResponse(step=result)


@checkout_router.post("/orders", status_code=201, response_model=OrderConfirmationResponse)
def place_order(
    body: PlaceOrderRequest,
    x_session_id: str = Header(),
    x_customer_id: str = Header(),
) -> OrderConfirmationResponse:
    """Charge the selected payment method and record the cart as an order.

    The cart and shipping details are cleared once the order is recorded.
    Declared synchronous so a slow processor runs in the threadpool rather
    than on the event loop.
    """
    command = PlaceOrder(
        session_id=x_session_id,
        customer_id=x_customer_id,
        payment_method=body.payment_method,
    )
    confirmation = current_domain.process(command, asynchronous=False)
    return OrderConfirmationResponse(
        order_id=confirmation.order_id,
        total=confirmation.total,
        item_count=confirmation.item_count,
        payment_method=confirmation.payment_method,
        estimated_delivery=confirmation.estimated_delivery,
        placed_at=confirmation.placed_at,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=OrderListResponse)
async def list_orders(x_customer_id: str = Header()) -> OrderListResponse:
    """The customer's orders, newest first."""
    orders = current_domain.repository_for(Order).for_customer(x_customer_id)
    return OrderListResponse(orders=[_order_response(order) for order in orders])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, x_customer_id: str = Header()) -> OrderResponse:
    order = current_domain.repository_for(Order).find_for_customer(order_id, x_customer_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return _order_response(order)


@order_router.post("/{order_id}/cancellation", response_model=CancellationQuoteResponse | None)
async def request_cancellation(order_id: str, x_customer_id: str = Header()) -> CancellationQuoteResponse | None:
    command = RequestCancellation(
        order_id=order_id,
        customer_id=x_customer_id,
    )
    quote = current_domain.process(command, asynchronous=False)
    if quote is None:
        return None
    return CancellationQuoteResponse(
        order_id=quote.order_id,
        item_count=quote.item_count,
        refund_amount=quote.refund_amount,
        placed_at=quote.placed_at,
        token=quote.token,
    )


@order_router.delete("/{order_id}/cancellation", response_model=StatusResponse)
async def withdraw_cancellation(order_id: str, x_customer_id: str = Header()) -> StatusResponse:
    """Keep the order."""
    command = WithdrawCancellation(
        order_id=order_id,
        customer_id=x_customer_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.post("/{order_id}/cancellation/confirm", response_model=CancellationReceiptResponse | None)
async def confirm_cancellation(
    order_id: str,
    body: ConfirmCancellationRequest,
    x_customer_id: str = Header(),
) -> CancellationReceiptResponse | None:
    command = ConfirmCancellation(
        order_id=order_id,
        customer_id=x_customer_id,
        token=body.token,
    )
    receipt = current_domain.process(command, asynchronous=False)
    if receipt is None:
        return None
    return CancellationReceiptResponse(
        order_id=receipt.order_id,
        refund_amount=receipt.refund_amount,
        cancelled_at=receipt.cancelled_at,
    )

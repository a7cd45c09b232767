"""Checkout step transitions — commands and handler.

Moves a session between the cart, shipping and payment steps. Order
placement itself lives with the Order aggregate.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from checkout.cart.cart import CheckoutStep, ShoppingCart
from checkout.domain import checkout


@checkout.command(part_of="ShoppingCart")
class ChangeCheckoutStep:
    """Navigate to the shipping form, or back to the cart."""

    session_id = Identifier(required=True)
    step = String(required=True, choices=CheckoutStep)


@checkout.command(part_of="ShoppingCart")
class SubmitShipping:
    session_id = Identifier(required=True)
    shipping = Text(required=True)  # JSON: address dict


@checkout.command_handler(part_of=ShoppingCart)
class CheckoutStepsHandler:
    @handle(ChangeCheckoutStep)
    def change_checkout_step(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)

        target = CheckoutStep(command.step)
        if target == CheckoutStep.SHIPPING:
            cart.proceed_to_shipping()
        elif target == CheckoutStep.CART:
            cart.return_to_cart()
        else:
            raise ValidationError({"step": ["Submit a shipping address to reach the payment step"]})

        repo.add(cart)
        return cart.step

    @handle(SubmitShipping)
    def submit_shipping(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)

        shipping = json.loads(command.shipping) if isinstance(command.shipping, str) else command.shipping
        if not isinstance(shipping, dict):
            raise ValidationError({"shipping": ["Shipping details must be an object"]})
        cart.submit_shipping(shipping)
        repo.add(cart)
        return cart.step

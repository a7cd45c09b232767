"""Cart line management — commands and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from checkout.cart.cart import ShoppingCart
from checkout.domain import checkout


@checkout.command(part_of="ShoppingCart")
class AddToCart:
    session_id = Identifier(required=True)
    artifact_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    value = Float(required=True, min_value=0.0)
    period = String(max_length=100)
    origin = String(max_length=100)
    image_url = String(max_length=2048)
    revoked = Boolean(default=False)


@checkout.command(part_of="ShoppingCart")
class SetCartQuantity:
    session_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    quantity = Integer(required=True)  # Zero or negative removes the line


@checkout.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = Identifier(required=True)
    cart_id = Identifier(required=True)


@checkout.command(part_of="ShoppingCart")
class RestoreCart:
    """Replace the session cart with a snapshot kept in browser storage."""

    session_id = Identifier(required=True)
    lines = Text()  # JSON: list of cart line dicts; anything else empties the cart


@checkout.command_handler(part_of=ShoppingCart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        line = cart.add_artifact(
            artifact_id=command.artifact_id,
            name=command.name,
            value=command.value,
            period=command.period,
            origin=command.origin,
            image_url=command.image_url,
            revoked=bool(command.revoked),
        )
        repo.add(cart)
        return str(line.cart_id)

    @handle(SetCartQuantity)
    def set_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        if cart.set_quantity(command.cart_id, command.quantity):
            repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        if cart.remove_line(command.cart_id):
            repo.add(cart)

    @handle(RestoreCart)
    def restore_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        cart.restore(command.lines)
        repo.add(cart)
        return cart.item_count()

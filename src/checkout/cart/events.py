"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, String, Text

from checkout.domain import checkout


@checkout.event(part_of="ShoppingCart")
class CartLineAdded:
    """An artifact was added to the cart as a new line."""

    __version__ = 1

    session_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    artifact_id = Identifier(required=True)
    name = String(required=True)
    value = Float(required=True)


@checkout.event(part_of="ShoppingCart")
class CartQuantityUpdated:
    """The quantity of a cart line was changed."""

    __version__ = 1

    session_id = Identifier(required=True)
    cart_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@checkout.event(part_of="ShoppingCart")
class CartLineRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    session_id = Identifier(required=True)
    cart_id = Identifier(required=True)


@checkout.event(part_of="ShoppingCart")
class CartRestored:
    """The cart lines were replaced with a snapshot handed over by the browser."""

    __version__ = 1

    session_id = Identifier(required=True)
    line_count = Integer(required=True)
    discarded = Integer(default=0)


@checkout.event(part_of="ShoppingCart")
class CheckoutStepChanged:
    """The session moved between the cart, shipping and payment steps."""

    __version__ = 1

    session_id = Identifier(required=True)
    previous_step = String(required=True)
    new_step = String(required=True)


@checkout.event(part_of="ShoppingCart")
class ShippingCaptured:
    """A complete shipping address was recorded for the session."""

    __version__ = 1

    session_id = Identifier(required=True)
    shipping = Text(required=True)  # JSON: address dict


@checkout.event(part_of="ShoppingCart")
class CartCleared:
    """The cart was emptied after its contents became an order."""

    __version__ = 1

    session_id = Identifier(required=True)
    order_id = Identifier(required=True)

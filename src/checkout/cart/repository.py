"""Repository for the ShoppingCart aggregate."""

from protean.exceptions import ObjectNotFoundError

from checkout.cart.cart import ShoppingCart
from checkout.domain import checkout


@checkout.repository(part_of=ShoppingCart)
class CartRepository:
    """Session carts.

    A session that has never touched its cart gets a fresh, unsaved cart so
    callers never have to create one explicitly.
    """

    def for_session(self, session_id) -> ShoppingCart:
        try:
            return self.get(session_id)
        except ObjectNotFoundError:
            return ShoppingCart.start(session_id)

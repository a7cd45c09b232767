"""Shipping capture — the destination address collected during checkout.

The address is captured on the session cart at the shipping step and copied
onto the Order at placement time. Once recorded on an Order it is immutable,
regardless of what the shopper types into later checkouts.
"""

from collections.abc import Mapping

from protean.fields import String

from checkout.domain import checkout

REQUIRED_SHIPPING_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "street",
    "city",
    "province",
    "zip_code",
)

DEFAULT_COUNTRY = "Philippines"


@checkout.value_object
class ShippingAddress:
    """Where an order is delivered and whom to contact about it."""

    email = String(max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    street = String(max_length=255)  # Street / barangay
    city = String(max_length=100)
    province = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100, default=DEFAULT_COUNTRY)


def _as_mapping(shipping) -> Mapping:
    if shipping is None:
        return {}
    if isinstance(shipping, Mapping):
        return shipping
    return shipping.to_dict()


def missing_fields(shipping) -> list[str]:
    """Required fields that are absent or blank, in form order."""
    values = _as_mapping(shipping)
    missing = []
    for field_name in REQUIRED_SHIPPING_FIELDS:
        value = values.get(field_name)
        if not isinstance(value, str) or not value.strip():
            missing.append(field_name)
    return missing


def is_complete(shipping) -> bool:
    """True when every required field holds a non-blank string. Country is optional."""
    return not missing_fields(shipping)

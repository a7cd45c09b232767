"""Shared BDD fixtures and step definitions for the Checkout domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@pytest.fixture()
def session_id():
    return "sess-bdd-001"


@pytest.fixture()
def customer_id():
    return "cust-bdd-001"


@pytest.fixture()
def shipping():
    return {
        "first_name": "Maria",
        "last_name": "Santos",
        "email": "maria@example.ph",
        "street": "Barangay San Roque",
        "city": "Quezon City",
        "province": "Metro Manila",
        "zip_code": "1100",
    }


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)

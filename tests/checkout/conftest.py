import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def checkout_bed():
    from checkout.domain import checkout

    bed = DomainFixture(checkout)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(checkout_bed):
    from checkout.payment import reset_processor

    with checkout_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()

    reset_processor()

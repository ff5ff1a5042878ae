import pytest
from protean.integrations.pytest import DomainFixture

from storefront.gateway import reset_gateway, set_gateway
from storefront.gateway.fake_adapter import FakeGateway


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def gateway():
    """A fresh FakeGateway for every test."""
    fake = FakeGateway(webhook_secret="whsec_test")
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture()
def make_product():
    """Add a catalogue product through the admin command; returns its id."""
    from protean import current_domain

    from storefront.catalogue.management import AddProduct

    def _make(**overrides):
        defaults = {
            "name_en": "Rustic Terracotta Bowl",
            "name_fr": "Bol en Terre Cuite Rustique",
            "description_en": "A handcrafted terracotta bowl.",
            "description_fr": "Un bol en terre cuite fait main.",
            "price": "45.00",
            "category": "bowls",
            "image_url": "https://images.example.com/bowl.jpg",
        }
        defaults.update(overrides)
        return current_domain.process(AddProduct(**defaults), asynchronous=False)

    return _make

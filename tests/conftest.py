import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is first imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    bed = DomainFixture(storefront)
    bed.setup()
    setup_db(storefront)
    yield bed
    drop_db(storefront)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Clean up infrastructure after every test."""
    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Catalog helpers
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Persist a product and return it. Keyword arguments go to ``Product.create``."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _make(name="Heritage Watch", price=100.0, quantity=10, **kwargs):
        product = Product.create(name=name, price=price, quantity=quantity, **kwargs)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def reload_product():
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _reload(product):
        return current_domain.repository_for(Product).get(str(product.id))

    return _reload


@pytest.fixture()
def shipping_address():
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "street": "12 St James's Square",
        "city": "London",
        "state": "London",
        "postal_code": "SW1Y 4JH",
        "country": "GB",
    }


@pytest.fixture()
def payment_info():
    return {"method": "card", "last_four": "4242", "brand": "visa"}

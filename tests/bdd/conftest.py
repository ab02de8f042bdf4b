"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.items import AddToCart
from storefront.cart.lookup import find_cart
from storefront.catalogue.product import Product


# ---------------------------------------------------------------------------
# Scalar fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def customer_id():
    return "cust-001"


@pytest.fixture()
def catalog():
    """Products created by the scenario, by name."""
    return {}


@pytest.fixture()
def error():
    """Container for the exception a When step captured."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {quantity:d} in stock'))
def _(make_product, catalog, name, price, quantity):
    catalog[name] = make_product(name=name, price=price, quantity=quantity)


@given(parsers.cfparse('the customer has {quantity:d} of "{name}" in the cart'))
def _(catalog, customer_id, quantity, name):
    current_domain.process(
        AddToCart(customer_id=customer_id, product_id=str(catalog[name].id), quantity=quantity),
        asynchronous=False,
    )


@given(parsers.cfparse('"{name}" has been archived'))
def _(catalog, reload_product, name):
    product = reload_product(catalog[name])
    product.status = "archived"
    current_domain.repository_for(Product).add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {quantity:d} in stock'))
def _(catalog, reload_product, name, quantity):
    assert reload_product(catalog[name]).available_quantity == quantity


@then(parsers.cfparse("the cart holds {count:d} items"))
def _(customer_id, count):
    cart = find_cart(customer_id)
    assert cart is not None
    assert cart.item_count == count


@then("the cart is empty")
def _(customer_id):
    assert find_cart(customer_id).is_empty


@then(parsers.cfparse('the request is rejected with "{message}"'))
def _(error, message):
    exc = error["exc"]
    assert isinstance(exc, ValidationError)
    flattened = [m for messages in exc.messages.values() for m in messages]
    assert message in flattened

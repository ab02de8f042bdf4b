"""BDD tests for moving wishlist items into the cart."""

from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.wishlist.items import AddToWishlist
from storefront.wishlist.lookup import load_wishlist
from storefront.wishlist.transfer import MoveWishlistItemToCart

scenarios("features/wishlist_to_cart.feature")


@given(parsers.cfparse('the customer saved "{name}" to the wishlist'))
def _(catalog, customer_id, name):
    current_domain.process(
        AddToWishlist(customer_id=customer_id, product_id=str(catalog[name].id)),
        asynchronous=False,
    )


@when(parsers.cfparse('the customer moves "{name}" to the cart'))
def _(catalog, customer_id, error, name):
    try:
        current_domain.process(
            MoveWishlistItemToCart(customer_id=customer_id, product_id=str(catalog[name].id)),
            asynchronous=False,
        )
    except (ValidationError, ObjectNotFoundError) as exc:
        error["exc"] = exc


@then(parsers.cfparse('the wishlist does not contain "{name}"'))
def _(catalog, customer_id, name):
    assert not load_wishlist(customer_id).has_item(catalog[name].id)


@then(parsers.cfparse('the wishlist contains "{name}"'))
def _(catalog, customer_id, name):
    assert load_wishlist(customer_id).has_item(catalog[name].id)

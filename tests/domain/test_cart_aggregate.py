"""Tests for the Cart aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.cart.cart import Cart, ShippingMethod
from storefront.cart.events import (
    CartCleared,
    CartCouponApplied,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartOpened,
)
from storefront.catalogue.product import Product

SIZE_M = {"name": "size", "value": "M", "price_adjustment": 0.0}
SIZE_XL = {"name": "size", "value": "XL", "price_adjustment": 5.0}


def _product(**overrides):
    defaults = {"name": "Linen Shirt", "price": 60.0, "quantity": 10}
    defaults.update(overrides)
    return Product.create(**defaults)


def _cart():
    return Cart.open("cust-001")


class TestOpenCart:
    def test_new_cart_is_empty(self):
        cart = _cart()
        assert cart.is_empty
        assert cart.item_count == 0
        assert cart.coupon is None
        assert cart.shipping_method == ShippingMethod.STANDARD.value

    def test_raises_cart_opened(self):
        cart = _cart()
        assert any(isinstance(e, CartOpened) for e in cart._events)


class TestAddItem:
    def test_add_item(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].product_id == str(product.id)

    def test_same_product_and_variant_merges(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1, SIZE_M)
        cart.add_item(product, 2, SIZE_M)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_different_variant_creates_new_line(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1, SIZE_M)
        cart.add_item(product, 1, SIZE_XL)
        assert len(cart.items) == 2

    def test_variant_and_no_variant_are_different_lines(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1)
        cart.add_item(product, 1, SIZE_M)
        assert len(cart.items) == 2

    def test_zero_quantity_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError):
            cart.add_item(_product(), 0)

    def test_inactive_product_rejected(self):
        cart = _cart()
        with pytest.raises(ValidationError) as exc_info:
            cart.add_item(_product(status="draft"), 1)
        assert "product_id" in exc_info.value.messages
        assert cart.is_empty

    def test_archived_product_rejected(self):
        with pytest.raises(ValidationError):
            _cart().add_item(_product(status="archived"), 1)

    def test_adding_does_not_touch_stock(self):
        product = _product(quantity=1)
        _cart().add_item(product, 5)
        assert product.available_quantity == 1

    def test_raises_item_added_event(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1)
        cart.add_item(product, 2)
        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert [e.quantity for e in events] == [1, 2]
        assert events[-1].line_quantity == 3


class TestItemCount:
    def test_sums_quantities(self):
        cart = _cart()
        cart.add_item(_product(), 2)
        cart.add_item(_product(name="Belt"), 3)
        assert cart.item_count == 5


class TestUpdateQuantity:
    def test_replaces_quantity(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1)
        assert cart.update_quantity(product.id, 4) is True
        assert cart.items[0].quantity == 4

    def test_zero_removes_line(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 3)
        cart.update_quantity(product.id, 0)
        assert cart.find_item(product.id) is None

    def test_missing_line_is_a_no_op(self):
        cart = _cart()
        cart.add_item(_product(), 1)
        assert cart.update_quantity("unknown", 4) is False
        assert cart.item_count == 1

    def test_respects_variant(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1, SIZE_M)
        cart.add_item(product, 1, SIZE_XL)
        cart.update_quantity(product.id, 5, SIZE_XL)
        assert cart.find_item(product.id, SIZE_M).quantity == 1
        assert cart.find_item(product.id, SIZE_XL).quantity == 5

    def test_negative_quantity_rejected(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1)
        with pytest.raises(ValidationError):
            cart.update_quantity(product.id, -1)

    def test_raises_event(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1)
        cart.update_quantity(product.id, 3)
        event = next(e for e in cart._events if isinstance(e, CartItemQuantityUpdated))
        assert event.previous_quantity == 1
        assert event.new_quantity == 3


class TestRemoveItem:
    def test_remove(self):
        cart = _cart()
        product = _product()
        cart.add_item(product, 1)
        assert cart.remove_item(product.id) is True
        assert cart.is_empty
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_remove_absent_is_a_no_op(self):
        cart = _cart()
        cart.add_item(_product(), 1)
        assert cart.remove_item("unknown") is False
        assert len(cart.items) == 1


class TestCoupon:
    def test_apply_stores_values_verbatim(self):
        cart = _cart()
        cart.apply_coupon("SAVE10", 10, "percentage")
        assert cart.coupon.code == "SAVE10"
        assert cart.coupon.discount == 10
        assert cart.coupon.discount_type == "percentage"
        assert any(isinstance(e, CartCouponApplied) for e in cart._events)

    def test_reapplying_replaces(self):
        cart = _cart()
        cart.apply_coupon("SAVE10", 10, "percentage")
        cart.apply_coupon("FLAT5", 5, "fixed")
        assert cart.coupon.code == "FLAT5"

    def test_invalid_type_rejected(self):
        with pytest.raises(ValidationError):
            _cart().apply_coupon("BOGUS", 10, "bogo")

    def test_remove(self):
        cart = _cart()
        cart.apply_coupon("SAVE10", 10, "percentage")
        cart.remove_coupon()
        assert cart.coupon is None


class TestShippingMethod:
    def test_set(self):
        cart = _cart()
        cart.set_shipping_method("overnight")
        assert cart.shipping_method == "overnight"

    def test_invalid(self):
        with pytest.raises(ValidationError):
            _cart().set_shipping_method("teleport")


class TestClear:
    def test_clear_removes_items_and_coupon(self):
        cart = _cart()
        cart.add_item(_product(), 2)
        cart.add_item(_product(name="Belt"), 1)
        cart.apply_coupon("SAVE10", 10, "percentage")

        cart.clear()

        assert cart.is_empty
        assert cart.coupon is None
        assert cart.item_count == 0
        event = next(e for e in cart._events if isinstance(e, CartCleared))
        assert event.item_count == 2

"""Unit tests for the Cart aggregate and CartSnapshot."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _product(pid: str = "1", name: str = "Widget", price: str = "10.00") -> Product:
    return Product(id=pid, name=name, price=Money.of(price))


class TestCartAdd:

    def test_new_product_appends_line(self):
        cart = Cart()
        cart.add(_product(), 2)
        assert len(cart) == 1
        assert cart.get("1").quantity == 2

    def test_default_quantity_is_one(self):
        cart = Cart()
        cart.add(_product())
        assert cart.total_items == 1

    def test_same_product_merges_into_one_line(self):
        cart = Cart()
        cart.add(_product(), 2)
        cart.add(_product(), 3)
        assert len(cart) == 1
        assert cart.get("1").quantity == 5

    def test_lines_keep_insertion_order(self):
        cart = Cart()
        cart.add(_product("2", "Gadget"))
        cart.add(_product("1", "Widget"))
        cart.add(_product("2", "Gadget"))
        assert [line.product_id for line in cart.lines] == ["2", "1"]

    @pytest.mark.parametrize("qty", [0, -1, True, 1.5])
    def test_invalid_quantity_rejected(self, qty):
        cart = Cart()
        with pytest.raises(ValidationError, match="at least 1"):
            cart.add(_product(), qty)
        assert cart.is_empty


class TestCartSetQuantity:

    def test_sets_not_increments(self):
        cart = Cart()
        cart.add(_product(), 2)
        cart.set_quantity("1", 7)
        assert cart.get("1").quantity == 7

    @pytest.mark.parametrize("qty", [0, -5])
    def test_zero_or_less_removes_line(self, qty):
        cart = Cart()
        cart.add(_product(), 2)
        cart.set_quantity("1", qty)
        assert "1" not in cart
        assert cart.is_empty

    def test_unknown_product_ignored(self):
        cart = Cart()
        cart.add(_product(), 2)
        cart.set_quantity("99", 4)
        assert len(cart) == 1

    def test_remove_and_clear(self):
        cart = Cart()
        cart.add(_product("1"))
        cart.add(_product("2", "Gadget"))
        cart.remove("1")
        cart.remove("404")
        assert [line.product_id for line in cart.lines] == ["2"]
        cart.clear()
        assert cart.is_empty


class TestCartTotals:

    def test_subtotal_and_item_count(self):
        cart = Cart()
        cart.add(_product("1", price="10.00"), 2)
        cart.add(_product("2", "Gadget", price="5.00"), 1)
        assert cart.subtotal == Money.of("25.00")
        assert cart.total_items == 3

    def test_empty_cart_totals(self):
        cart = Cart()
        assert cart.subtotal == Money.zero()
        assert cart.total_items == 0

    def test_subtotal_follows_current_price(self):
        widget = _product(price="10.00")
        cart = Cart()
        cart.add(widget, 2)
        widget.update_price(Money.of("12.00"))
        assert cart.subtotal == Money.of("24.00")

    def test_line_requires_positive_quantity(self):
        with pytest.raises(ValidationError):
            CartLine(product=_product(), quantity=0)


class TestCartSnapshot:

    def test_snapshot_freezes_prices(self):
        widget = _product(price="10.00")
        cart = Cart()
        cart.add(widget, 2)
        snap = cart.snapshot()
        widget.update_price(Money.of("99.00"))
        assert snap.subtotal == Money.of("20.00")
        assert snap.lines[0].unit_price == Money.of("10.00")

    def test_snapshot_unaffected_by_later_edits(self):
        cart = Cart()
        cart.add(_product(), 2)
        snap = cart.snapshot()
        cart.add(_product("2", "Gadget"), 1)
        cart.set_quantity("1", 0)
        assert len(snap) == 1
        assert snap.total_items == 2

    def test_empty_snapshot(self):
        snap = Cart().snapshot()
        assert snap.is_empty
        assert snap.subtotal == Money.zero()

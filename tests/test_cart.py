from __future__ import annotations

from decimal import Decimal

import pytest

from vendas_client_sdk.cart import (
    EMPTY_CART,
    add_product,
    can_increment,
    cart_total,
    decrement,
    increment,
    item_count,
    remove_line,
    set_quantity,
)
from vendas_client_sdk.models import Product


def _product(product_id: str = "1", price: str = "10.00", stock: int = 5, **extra) -> Product:
    return Product(id=product_id, code=f"P{product_id}", name=f"Produto {product_id}", price=Decimal(price), stock=stock, **extra)


def test_adding_same_product_twice_increments_quantity() -> None:
    product = _product()
    cart = add_product(add_product(EMPTY_CART, product), product)
    assert len(cart) == 1
    line = cart.lines[0]
    assert line.quantity == 2
    assert line.subtotal == Decimal("20.00")
    assert cart_total(cart) == Decimal("20.00")


def test_new_line_snapshots_catalog_values() -> None:
    product = _product(price="7.50", stock=3, unit="KG")
    line = add_product(EMPTY_CART, product).lines[0]
    assert (line.product_code, line.product_name, line.unit) == ("P1", "Produto 1", "KG")
    assert line.unit_price == Decimal("7.50")
    assert line.stock == 3
    assert line.quantity == 1


def test_operations_leave_input_cart_untouched() -> None:
    first = add_product(EMPTY_CART, _product())
    second = set_quantity(first, "1", 4)
    assert first.lines[0].quantity == 1
    assert second.lines[0].quantity == 4
    assert EMPTY_CART.is_empty


@pytest.mark.parametrize("quantity", [0, -1])
def test_non_positive_quantity_removes_line(quantity: int) -> None:
    cart = add_product(add_product(EMPTY_CART, _product("1")), _product("2", price="5.00"))
    updated = set_quantity(cart, "1", quantity)
    assert [line.product_id for line in updated.lines] == ["2"]
    assert updated == remove_line(cart, "1")


def test_set_quantity_recomputes_subtotal_and_accepts_values_over_stock() -> None:
    cart = set_quantity(add_product(EMPTY_CART, _product(stock=2)), "1", 7)
    line = cart.lines[0]
    assert line.quantity == 7
    assert line.subtotal == Decimal("70.00")
    assert line.at_stock_ceiling


def test_unknown_product_id_is_a_no_op() -> None:
    cart = add_product(EMPTY_CART, _product())
    assert set_quantity(cart, "missing", 3) is cart
    assert remove_line(cart, "missing") is cart
    assert increment(cart, "missing") is cart


def test_total_is_sum_of_subtotals_and_zero_when_empty() -> None:
    cart = add_product(EMPTY_CART, _product("1", price="10.00"))
    cart = add_product(cart, _product("2", price="2.35"))
    cart = set_quantity(cart, "2", 3)
    assert cart_total(cart) == sum((line.subtotal for line in cart.lines), Decimal("0"))
    assert cart_total(cart) == Decimal("17.05")
    assert cart_total(EMPTY_CART) == Decimal("0.00")
    assert item_count(cart) == 4


def test_increment_stops_at_stock_ceiling_and_decrement_removes() -> None:
    cart = add_product(EMPTY_CART, _product(stock=2))
    cart = increment(cart, "1")
    assert cart.lines[0].quantity == 2
    assert not can_increment(cart.lines[0])
    assert increment(cart, "1").lines[0].quantity == 2
    cart = decrement(decrement(cart, "1"), "1")
    assert cart.is_empty


def test_lines_keep_insertion_order() -> None:
    cart = EMPTY_CART
    for product_id in ("3", "1", "2"):
        cart = add_product(cart, _product(product_id))
    cart = add_product(cart, _product("1"))
    assert [line.product_id for line in cart.lines] == ["3", "1", "2"]


def test_add_twice_then_set_quantity_three() -> None:
    product = _product("1", price="10.00", stock=5)
    cart = add_product(add_product(EMPTY_CART, product), product)
    cart = set_quantity(cart, "1", 3)
    assert len(cart) == 1
    assert cart.lines[0].quantity == 3
    assert cart.lines[0].subtotal == Decimal("30.00")
    assert cart_total(cart) == Decimal("30.00")


def test_total_does_not_depend_on_operation_order() -> None:
    pen = _product("1", price="10.00")
    pencil = _product("2", price="2.35")
    eraser = _product("3", price="0.99")

    first = add_product(add_product(add_product(EMPTY_CART, pen), pencil), eraser)
    first = set_quantity(first, "2", 3)
    first = remove_line(first, "3")
    first = increment(first, "1")

    second = add_product(EMPTY_CART, pencil)
    second = add_product(second, pen)
    second = add_product(second, pen)
    second = increment(increment(second, "2"), "2")

    assert [line.product_id for line in first.lines] != [line.product_id for line in second.lines]
    assert cart_total(first) == cart_total(second) == Decimal("27.05")
    assert item_count(first) == item_count(second) == 5

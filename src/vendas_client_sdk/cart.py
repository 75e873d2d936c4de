from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from .models import Product

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class CartLine:
    """One product in the cart, with catalog values copied at add time."""

    product_id: str
    product_code: str
    product_name: str
    quantity: int
    unit_price: Decimal
    stock: int
    unit: str = "UN"

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def at_stock_ceiling(self) -> bool:
        return self.quantity >= self.stock


@dataclass(frozen=True)
class Cart:
    lines: tuple[CartLine, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None


EMPTY_CART = Cart()


def add_product(cart: Cart, product: Product) -> Cart:
    """Add one unit of ``product``; a product already in the cart gets +1."""
    if cart.get(product.id) is not None:
        return _map_line(cart, product.id, lambda line: replace(line, quantity=line.quantity + 1))
    line = CartLine(
        product_id=product.id,
        product_code=product.code,
        product_name=product.name,
        quantity=1,
        unit_price=Decimal(product.price),
        stock=product.stock,
        unit=product.unit,
    )
    return Cart(lines=cart.lines + (line,))


def set_quantity(cart: Cart, product_id: str, quantity: int) -> Cart:
    """Replace the quantity of a line; zero or less removes it.

    Values above the stock ceiling are accepted as given.
    """
    if quantity <= 0:
        return remove_line(cart, product_id)
    return _map_line(cart, product_id, lambda line: replace(line, quantity=quantity))


def remove_line(cart: Cart, product_id: str) -> Cart:
    if cart.get(product_id) is None:
        return cart
    return Cart(lines=tuple(line for line in cart.lines if line.product_id != product_id))


def can_increment(line: CartLine) -> bool:
    return not line.at_stock_ceiling


def increment(cart: Cart, product_id: str) -> Cart:
    line = cart.get(product_id)
    if line is None or not can_increment(line):
        return cart
    return set_quantity(cart, product_id, line.quantity + 1)


def decrement(cart: Cart, product_id: str) -> Cart:
    line = cart.get(product_id)
    if line is None:
        return cart
    return set_quantity(cart, product_id, line.quantity - 1)


def cart_total(cart: Cart) -> Decimal:
    return sum((line.subtotal for line in cart.lines), ZERO)


def item_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart.lines)


def _map_line(cart: Cart, product_id: str, change) -> Cart:
    if cart.get(product_id) is None:
        return cart
    return Cart(lines=tuple(change(line) if line.product_id == product_id else line for line in cart.lines))

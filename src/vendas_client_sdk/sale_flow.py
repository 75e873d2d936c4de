from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from . import cart as cart_engine
from .cart import EMPTY_CART, Cart
from .exceptions import ValidationError
from .models import Product, Sale, SaleCreate, SaleHeader, UserRecord
from .sale_assembly import build_sale


class SaleFlowState(str, Enum):
    HEADER = "HEADER"
    PRODUCTS = "PRODUCTS"
    CHECKOUT = "CHECKOUT"
    DONE = "DONE"


@dataclass
class SaleFlow:
    """One new-sale session: header, then products, then checkout.

    The header is locked once confirmed. Going back to the header step is
    possible until checkout has been entered. A finished flow is replaced by
    ``restart()`` and never reused.
    """

    state: SaleFlowState = SaleFlowState.HEADER
    header: SaleHeader | None = None
    cart: Cart = EMPTY_CART
    sale: Sale | None = None
    checkout_entered: bool = field(default=False, repr=False)

    @property
    def total(self) -> Decimal:
        return cart_engine.cart_total(self.cart)

    @property
    def can_open_products(self) -> bool:
        return self.header is not None and self.state is not SaleFlowState.DONE

    @property
    def can_open_checkout(self) -> bool:
        return self.header is not None and not self.cart.is_empty and self.state is not SaleFlowState.DONE

    def confirm_header(self, header: SaleHeader) -> None:
        self._expect(SaleFlowState.HEADER, "confirm header")
        if self.header is not None and header != self.header:
            raise ValidationError("header", "sale header is locked once confirmed")
        self.header = header
        self.state = SaleFlowState.PRODUCTS

    def back_to_header(self) -> None:
        if self.checkout_entered:
            raise ValidationError("state", "the header cannot be revisited after checkout")
        self._expect(SaleFlowState.PRODUCTS, "go back to header")
        self.state = SaleFlowState.HEADER

    def add_product(self, product: Product) -> Cart:
        self._expect(SaleFlowState.PRODUCTS, "add product")
        self.cart = cart_engine.add_product(self.cart, product)
        return self.cart

    def set_quantity(self, product_id: str, quantity: int) -> Cart:
        self._expect(SaleFlowState.PRODUCTS, "change quantity")
        self.cart = cart_engine.set_quantity(self.cart, product_id, quantity)
        return self.cart

    def increment(self, product_id: str) -> Cart:
        self._expect(SaleFlowState.PRODUCTS, "change quantity")
        self.cart = cart_engine.increment(self.cart, product_id)
        return self.cart

    def decrement(self, product_id: str) -> Cart:
        self._expect(SaleFlowState.PRODUCTS, "change quantity")
        self.cart = cart_engine.decrement(self.cart, product_id)
        return self.cart

    def remove_line(self, product_id: str) -> Cart:
        self._expect(SaleFlowState.PRODUCTS, "remove product")
        self.cart = cart_engine.remove_line(self.cart, product_id)
        return self.cart

    def proceed_to_checkout(self) -> None:
        self._expect(SaleFlowState.PRODUCTS, "proceed to checkout")
        if self.cart.is_empty:
            raise ValidationError("items", "add at least one product to the cart")
        self.state = SaleFlowState.CHECKOUT
        self.checkout_entered = True

    def back_to_products(self) -> None:
        self._expect(SaleFlowState.CHECKOUT, "go back to products")
        self.state = SaleFlowState.PRODUCTS

    def prepare_sale(
        self,
        seller: UserRecord | None,
        *,
        now: date | datetime | None = None,
        random_source: random.Random | None = None,
    ) -> SaleCreate:
        self._expect(SaleFlowState.CHECKOUT, "finish sale")
        return build_sale(self.header, self.cart, seller, now=now, random_source=random_source)

    def complete(self, sale: Sale) -> None:
        """Record the persisted sale. Call only after the store confirmed it."""
        self._expect(SaleFlowState.CHECKOUT, "finish sale")
        self.sale = sale
        self.state = SaleFlowState.DONE

    def restart(self) -> SaleFlow:
        return SaleFlow()

    def _expect(self, state: SaleFlowState, action: str) -> None:
        if self.state is not state:
            raise ValidationError("state", f"cannot {action} while in {self.state.value}")

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from vendas_client_sdk.access_control import can_view_screen
from vendas_client_sdk.cart import Cart, can_increment, cart_total, item_count
from vendas_client_sdk.exceptions import InvalidResponseError, PermissionDenied, RemoteError, ValidationError
from vendas_client_sdk.models import Client, NegotiationType, Product, Sale, UserRecord
from vendas_client_sdk.sale_assembly import build_sale_header
from vendas_client_sdk.sale_flow import SaleFlow

from ..services.catalog_service import CatalogService, search_products
from ..services.sales_service import SalesService
from .shared.error_presenter import ErrorPresenter

SCREEN = "NovaVenda"
EMPTY_CART_MESSAGE = "Adicione pelo menos um produto ao carrinho"


def render_cart(cart: Cart) -> dict[str, Any]:
    return {
        "count": len(cart),
        "units": item_count(cart),
        "total": cart_total(cart),
        "rows": [
            {
                "product_id": line.product_id,
                "code": line.product_code,
                "name": line.product_name,
                "quantity": line.quantity,
                "unit": line.unit,
                "unit_price": line.unit_price,
                "subtotal": line.subtotal,
                "can_increment": can_increment(line),
            }
            for line in cart.lines
        ],
    }


@dataclass
class NewSaleView:
    catalog: CatalogService
    sales: SalesService
    actor: UserRecord | None
    flow: SaleFlow = field(default_factory=SaleFlow)
    clients: list[Client] = field(default_factory=list)
    negotiations: list[NegotiationType] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    presenter: ErrorPresenter = field(default_factory=ErrorPresenter)
    error_message: str | None = None
    trace_id: str | None = None
    is_submitting: bool = False
    last_sale: Sale | None = None

    def can_use(self) -> bool:
        return can_view_screen(self.actor, SCREEN)

    def tabs(self) -> dict[str, Any]:
        return {
            "active": self.flow.state.value,
            "products_enabled": self.flow.can_open_products,
            "checkout_enabled": self.flow.can_open_checkout,
        }

    def load_catalog(self) -> dict[str, Any]:
        if not self.can_use():
            return self._fail(PermissionDenied("new_sale", "Nova Venda não está disponível para este usuário"), "load_catalog")
        try:
            self.clients, self.negotiations, self.products = (list(rows) for rows in self.catalog.sale_catalog())
        except RemoteError as exc:
            return self._fail(exc, "load_catalog")
        return {"ok": True, "clients": len(self.clients), "negotiations": len(self.negotiations), "products": len(self.products)}

    def confirm_header(self, client_id: str | None, negotiation_type_id: str | None) -> dict[str, Any]:
        try:
            header = self.flow.header
            if header is None or client_id or negotiation_type_id:
                header = build_sale_header(client_id, negotiation_type_id, self.clients, self.negotiations)
            self.flow.confirm_header(header)
        except ValidationError as exc:
            return self._fail(exc, "confirm_header")
        return {"ok": True, "header": self.flow.header.model_dump(), "tabs": self.tabs()}

    def visible_products(self, term: str = "") -> list[Product]:
        return search_products(self.products, term)

    def add_product(self, product_id: str) -> dict[str, Any]:
        product = next((item for item in self.products if item.id == product_id), None)
        if product is None:
            return {"ok": False, "error": "Produto não encontrado"}
        return self._cart_change(lambda: self.flow.add_product(product), "add_product")

    def increment(self, product_id: str) -> dict[str, Any]:
        return self._cart_change(lambda: self.flow.increment(product_id), "increment")

    def decrement(self, product_id: str) -> dict[str, Any]:
        return self._cart_change(lambda: self.flow.decrement(product_id), "decrement")

    def set_quantity(self, product_id: str, quantity: int) -> dict[str, Any]:
        return self._cart_change(lambda: self.flow.set_quantity(product_id, quantity), "set_quantity")

    def remove_line(self, product_id: str) -> dict[str, Any]:
        return self._cart_change(lambda: self.flow.remove_line(product_id), "remove_line")

    def back_to_header(self) -> dict[str, Any]:
        try:
            self.flow.back_to_header()
        except ValidationError as exc:
            return self._fail(exc, "back_to_header")
        return {"ok": True, "tabs": self.tabs()}

    def go_to_checkout(self) -> dict[str, Any]:
        if self.flow.cart.is_empty:
            return {"ok": False, "error": EMPTY_CART_MESSAGE}
        try:
            self.flow.proceed_to_checkout()
        except ValidationError as exc:
            return self._fail(exc, "go_to_checkout")
        return {"ok": True, "tabs": self.tabs(), "cart": render_cart(self.flow.cart)}

    def back_to_products(self) -> dict[str, Any]:
        try:
            self.flow.back_to_products()
        except ValidationError as exc:
            return self._fail(exc, "back_to_products")
        return {"ok": True, "tabs": self.tabs()}

    def finalize(self, *, now: datetime | None = None, random_source: random.Random | None = None) -> dict[str, Any]:
        if self.is_submitting:
            return {"ok": False, "error": "Venda já está sendo finalizada"}
        try:
            pending = self.flow.prepare_sale(self.actor, now=now, random_source=random_source)
        except ValidationError as exc:
            return self._fail(exc, "finalize")
        self.is_submitting = True
        try:
            created = self.sales.create_sale(pending)
        except RemoteError as exc:
            result = self._fail(exc, "finalize", allow_retry=True)
            result["error"] = "Erro ao finalizar venda"
            # An unreadable 2xx reply may hide a stored sale.
            result["not_applied"] = not isinstance(exc, InvalidResponseError)
            return result
        finally:
            self.is_submitting = False
        self.flow.complete(created)
        self.last_sale = created
        self.flow = self.flow.restart()
        self.error_message = None
        return {"ok": True, "sale_id": created.id, "number": created.number, "total": created.total, "tabs": self.tabs()}

    def _cart_change(self, change, action: str) -> dict[str, Any]:
        try:
            cart = change()
        except ValidationError as exc:
            return self._fail(exc, action)
        return {"ok": True, "cart": render_cart(cart)}

    def _fail(self, exc: Exception, action: str, allow_retry: bool = False) -> dict[str, Any]:
        presented = self.presenter.present(exc, action=action, allow_retry=allow_retry)
        self.error_message = presented.user_message
        self.trace_id = presented.details.get("trace_id")
        return {
            "ok": False,
            "error": presented.user_message,
            "category": presented.category,
            "safe_to_retry": presented.safe_to_retry,
            "trace_id": self.trace_id,
        }

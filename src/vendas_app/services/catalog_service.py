from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable, Mapping, Sequence, TypeVar

from vendas_client_sdk import ApiSession
from vendas_client_sdk.clients.entities import NEWEST_FIRST, EntityClient
from vendas_client_sdk.exceptions import ValidationError
from vendas_client_sdk.models import UNITS, Client, NegotiationType, Product, StoredRecord

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=StoredRecord)


def _matches(term: str, *values: str | None) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in values)


def search_products(products: Iterable[Product], term: str) -> list[Product]:
    return [product for product in products if _matches(term, product.name, product.code)]


def search_clients(clients: Iterable[Client], term: str) -> list[Client]:
    return [client for client in clients if _matches(term, client.name, client.document, client.email)]


def search_negotiations(negotiations: Iterable[NegotiationType], term: str) -> list[NegotiationType]:
    return [item for item in negotiations if _matches(term, item.code, item.description)]


def _required_text(data: Mapping[str, Any], field: str) -> str:
    value = str(data.get(field) or "").strip()
    if not value:
        raise ValidationError(field, f"{field} is required")
    return value


def product_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    try:
        price = Decimal(str(data.get("price", "0") or "0"))
    except InvalidOperation as exc:
        raise ValidationError("price", "price must be a number") from exc
    if not price.is_finite():
        raise ValidationError("price", "price must be a number")
    if price < 0:
        raise ValidationError("price", "price must not be negative")
    try:
        stock = int(data.get("stock", 0) or 0)
    except (TypeError, ValueError) as exc:
        raise ValidationError("stock", "stock must be a whole number") from exc
    if stock < 0:
        raise ValidationError("stock", "stock must not be negative")
    unit = str(data.get("unit") or "UN").upper()
    if unit not in UNITS:
        raise ValidationError("unit", f"unit must be one of {', '.join(UNITS)}")
    return {
        "code": _required_text(data, "code"),
        "name": _required_text(data, "name"),
        "description": data.get("description") or None,
        "price": price,
        "stock": stock,
        "unit": unit,
        "active": bool(data.get("active", True)),
    }


def client_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    payload = {"name": _required_text(data, "name"), "active": bool(data.get("active", True))}
    for field in ("document", "email", "phone", "address"):
        payload[field] = (str(data.get(field) or "").strip()) or None
    return payload


def negotiation_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "code": _required_text(data, "code").upper(),
        "description": _required_text(data, "description"),
        "notes": data.get("notes") or None,
    }


class _Collection:
    """Newest-first listing plus create-or-update and delete for one entity."""

    def __init__(self, client_factory: Callable[[], EntityClient[R]], to_payload: Callable[[Mapping[str, Any]], dict]) -> None:
        self._client_factory = client_factory
        self._to_payload = to_payload

    def list(self) -> list:
        return self._client_factory().list(sort=NEWEST_FIRST)

    def active(self) -> list:
        return self._client_factory().filter({"active": True}, sort=NEWEST_FIRST)

    def save(self, data: Mapping[str, Any], record_id: str | None = None):
        payload = self._to_payload(data)
        client = self._client_factory()
        if record_id:
            record = client.update(record_id, payload)
            logger.info("catalog_record_updated", extra={"entity": client.entity, "record_id": record.id})
        else:
            record = client.create(payload)
            logger.info("catalog_record_created", extra={"entity": client.entity, "record_id": record.id})
        return record

    def delete(self, record_id: str) -> None:
        client = self._client_factory()
        client.delete(record_id)
        logger.info("catalog_record_deleted", extra={"entity": client.entity, "record_id": record_id})


class CatalogService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session
        self.products = _Collection(session.products, product_payload)
        self.clients = _Collection(session.clients, client_payload)
        self.negotiations = _Collection(session.negotiation_types, negotiation_payload)

    def active_products(self) -> list[Product]:
        return self.products.active()

    def active_clients(self) -> list[Client]:
        return self.clients.active()

    def negotiation_types(self) -> list[NegotiationType]:
        return self.negotiations.list()

    def sale_catalog(self) -> tuple[Sequence[Client], Sequence[NegotiationType], Sequence[Product]]:
        """Reference data the new-sale screens need."""
        return self.active_clients(), self.negotiation_types(), self.active_products()

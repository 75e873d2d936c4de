from __future__ import annotations

import random
from datetime import date, datetime
from typing import Sequence

from .cart import Cart, cart_total
from .exceptions import ValidationError
from .models import Client, NegotiationType, SaleCreate, SaleHeader, SaleItem, SaleStatus, UserRecord

SALE_NUMBER_PREFIX = "VEN"
_SUFFIX_SPACE = 10_000


def generate_sale_number(
    now: date | datetime | None = None,
    random_source: random.Random | None = None,
) -> str:
    """Return ``VEN-YYYYMMDD-NNNNN``.

    The suffix is drawn from [0, 10000) with no uniqueness check against
    stored sales.
    """
    day = now or datetime.now()
    rng = random_source or random
    return f"{SALE_NUMBER_PREFIX}-{day:%Y%m%d}-{rng.randrange(_SUFFIX_SPACE):05d}"


def build_sale_header(
    client_id: str | None,
    negotiation_type_id: str | None,
    clients: Sequence[Client],
    negotiations: Sequence[NegotiationType],
) -> SaleHeader:
    if not client_id:
        raise ValidationError("client_id", "select a client")
    if not negotiation_type_id:
        raise ValidationError("negotiation_type_id", "select a negotiation type")
    client = next((item for item in clients if item.id == client_id), None)
    if client is None:
        raise ValidationError("client_id", f"unknown client {client_id}")
    negotiation = next((item for item in negotiations if item.id == negotiation_type_id), None)
    if negotiation is None:
        raise ValidationError("negotiation_type_id", f"unknown negotiation type {negotiation_type_id}")
    return SaleHeader(
        client_id=client.id,
        client_name=client.name,
        negotiation_type_id=negotiation.id,
        negotiation_type_name=negotiation.description,
    )


def build_sale(
    header: SaleHeader | None,
    cart: Cart,
    seller: UserRecord | None,
    *,
    now: date | datetime | None = None,
    random_source: random.Random | None = None,
) -> SaleCreate:
    if header is None:
        raise ValidationError("header", "sale header not confirmed")
    if seller is None:
        raise ValidationError("seller", "no signed-in seller")
    if cart.is_empty:
        raise ValidationError("items", "empty cart")
    items = tuple(
        SaleItem(
            product_id=line.product_id,
            product_code=line.product_code,
            product_name=line.product_name,
            quantity=line.quantity,
            unit_price=line.unit_price,
            subtotal=line.subtotal,
        )
        for line in cart.lines
    )
    return SaleCreate(
        number=generate_sale_number(now, random_source),
        seller_id=seller.id,
        seller_name=seller.full_name,
        client_id=header.client_id,
        client_name=header.client_name,
        negotiation_type_id=header.negotiation_type_id,
        negotiation_type_name=header.negotiation_type_name,
        total=cart_total(cart),
        status=SaleStatus.CONFIRMED.value,
        items=items,
    )

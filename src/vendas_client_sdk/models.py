from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer

# The store keeps prices as JSON numbers.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

UNITS: tuple[str, ...] = ("UN", "KG", "L", "M", "CX", "PC")


class Role(str, Enum):
    SUP = "SUP"
    ADMIN = "ADMIN"
    VENDEDOR = "VENDEDOR"


class SaleStatus(str, Enum):
    CONFIRMED = "CONFIRMED"


class StoredRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    created_date: datetime | None = None
    updated_date: datetime | None = None
    created_by: str | None = None


class Product(StoredRecord):
    code: str
    name: str
    description: str | None = None
    price: Money = Decimal("0")
    stock: int = 0
    unit: str = "UN"
    active: bool = True


class Client(StoredRecord):
    name: str
    document: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    active: bool = True


class NegotiationType(StoredRecord):
    code: str
    description: str
    notes: str | None = None


class UserRecord(StoredRecord):
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    active: bool = True
    profile_photo: str | None = None

    @property
    def display_name(self) -> str:
        return self.full_name or self.email or self.id


class ScreenPermissionCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    user_id: str
    user_name: str | None = None
    screen_name: str
    can_view: bool = True
    can_edit: bool = False
    can_delete: bool = False


class ScreenPermission(ScreenPermissionCreate):
    id: str
    created_date: datetime | None = None


class SaleHeader(BaseModel):
    """Client and negotiation chosen for a sale, with their display names."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_name: str
    negotiation_type_id: str
    negotiation_type_name: str


class SaleItem(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    product_id: str
    product_code: str | None = None
    product_name: str
    quantity: int = Field(ge=1)
    unit_price: Money
    subtotal: Money


class SaleCreate(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    number: str
    seller_id: str
    seller_name: str | None = None
    client_id: str
    client_name: str
    negotiation_type_id: str
    negotiation_type_name: str
    total: Money
    status: str = SaleStatus.CONFIRMED.value
    items: tuple[SaleItem, ...] = ()


class Sale(SaleCreate):
    id: str
    created_date: datetime | None = None


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    access_token: str
    user: UserRecord | None = None


class SessionData(BaseModel):
    access_token: str
    user: UserRecord | None = None
    env_name: str | None = None


class UploadedFile(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str = Field(validation_alias=AliasChoices("url", "file_url"))

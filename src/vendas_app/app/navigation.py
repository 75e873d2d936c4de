from __future__ import annotations

from dataclasses import dataclass

from vendas_client_sdk.access_control import visible_screens
from vendas_client_sdk.models import UserRecord

DEFAULT_SCREEN = "Dashboard"


@dataclass(frozen=True)
class NavItem:
    name: str
    title: str


def navigation_for(actor: UserRecord | None) -> list[NavItem]:
    return [NavItem(screen.name, screen.title) for screen in visible_screens(actor)]


def user_initials(actor: UserRecord | None) -> str:
    if actor is None:
        return "U"
    if actor.full_name and actor.full_name.strip():
        parts = actor.full_name.split()
        return "".join(part[0] for part in parts[:2]).upper()
    if actor.email:
        return actor.email[:2].upper()
    return "U"

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from vendas_client_sdk.models import UserRecord

from .navigation import NavItem


class Route(str, Enum):
    LOGIN = "login"
    PROFILE_SETUP = "profile_setup"
    SHELL = "shell"


@dataclass
class AppState:
    route: Route = Route.LOGIN
    actor: UserRecord | None = None
    screens: list[NavItem] = field(default_factory=list)
    initials: str = ""
    current_screen: str | None = None
    error_message: str | None = None
    status_message: str = "Ready"

"""Role checks the console runs before showing or issuing an action.

They only shape the UI: hidden buttons and refused clicks. The entity store
does not know about them, so none of this protects stored data.
"""

from __future__ import annotations

from typing import Protocol

from .exceptions import PermissionDenied
from .models import Role, UserRecord
from .screens import MANAGER_ROLES, SCREENS, SCREENS_BY_NAME, ScreenSpec


class Actor(Protocol):
    email: str | None
    role: str | None


def _role(user: Actor | None) -> str:
    if user is None:
        return ""
    return (user.role or "").strip().upper()


def is_manager(actor: Actor | None) -> bool:
    return _role(actor) in MANAGER_ROLES


def can_manage_sellers(actor: Actor | None) -> bool:
    return is_manager(actor)


def can_edit_seller(actor: Actor | None, subject: Actor) -> bool:
    if actor is None:
        return False
    if _role(subject) == Role.SUP.value:
        return bool(actor.email) and actor.email == subject.email
    return is_manager(actor)


def can_delete_seller(actor: Actor | None, subject: Actor) -> bool:
    if _role(subject) == Role.SUP.value:
        return False
    return is_manager(actor)


def can_view_screen(actor: Actor | None, screen_name: str) -> bool:
    screen = SCREENS_BY_NAME.get(screen_name)
    if screen is None or actor is None:
        return False
    return _role(actor) in screen.roles


def visible_screens(actor: Actor | None) -> list[ScreenSpec]:
    return [screen for screen in SCREENS if can_view_screen(actor, screen.name)]


def needs_profile_setup(user: UserRecord | None) -> bool:
    """True for accounts that still carry no role, or only the platform default one without a phone."""
    if user is None:
        return True
    role = _role(user)
    if not role:
        return True
    return role == "USER" and not user.phone


def require(allowed: bool, action: str, reason: str) -> None:
    if not allowed:
        raise PermissionDenied(action, reason)

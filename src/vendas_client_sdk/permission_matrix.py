from __future__ import annotations

from typing import Iterable, Sequence

from .exceptions import ValidationError
from .models import ScreenPermission, ScreenPermissionCreate, UserRecord
from .screens import SCREENS_BY_NAME


def permissions_for_screen(screen_name: str, permissions: Iterable[ScreenPermission]) -> list[ScreenPermission]:
    return [permission for permission in permissions if permission.screen_name == screen_name]


def _granted_user_ids(screen_name: str, permissions: Iterable[ScreenPermission]) -> set[str]:
    return {permission.user_id for permission in permissions_for_screen(screen_name, permissions)}


def users_with_access(
    screen_name: str,
    users: Sequence[UserRecord],
    permissions: Iterable[ScreenPermission],
) -> list[UserRecord]:
    granted = _granted_user_ids(screen_name, permissions)
    return [user for user in users if user.id in granted]


def users_without_access(
    screen_name: str,
    users: Sequence[UserRecord],
    permissions: Iterable[ScreenPermission],
) -> list[UserRecord]:
    granted = _granted_user_ids(screen_name, permissions)
    return [user for user in users if user.id not in granted]


def find_permission(
    screen_name: str,
    user_id: str,
    permissions: Iterable[ScreenPermission],
) -> ScreenPermission | None:
    for permission in permissions:
        if permission.screen_name == screen_name and permission.user_id == user_id:
            return permission
    return None


def permission_flags(permission: ScreenPermissionCreate) -> str:
    """Compact badge text: V(iew), E(dit), X (delete)."""
    flags = (
        ("V", permission.can_view),
        ("E", permission.can_edit),
        ("X", permission.can_delete),
    )
    return "".join(letter for letter, enabled in flags if enabled)


def ensure_unique_permission(screen_name: str, user_id: str, permissions: Iterable[ScreenPermission]) -> None:
    if find_permission(screen_name, user_id, permissions) is not None:
        raise ValidationError("user_id", f"user {user_id} already has a permission for {screen_name}")


def build_permission_payload(
    screen_name: str,
    user: UserRecord,
    *,
    can_view: bool = True,
    can_edit: bool = False,
    can_delete: bool = False,
) -> ScreenPermissionCreate:
    screen = SCREENS_BY_NAME.get(screen_name)
    if screen is None or not screen.grantable:
        raise ValidationError("screen_name", f"unknown screen {screen_name!r}")
    return ScreenPermissionCreate(
        user_id=user.id,
        user_name=user.full_name,
        screen_name=screen_name,
        can_view=can_view,
        can_edit=can_edit,
        can_delete=can_delete,
    )

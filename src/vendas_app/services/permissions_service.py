from __future__ import annotations

import logging
from dataclasses import dataclass, field

from vendas_client_sdk import ApiSession
from vendas_client_sdk.access_control import can_view_screen, require
from vendas_client_sdk.clients.entities import NEWEST_FIRST
from vendas_client_sdk.models import ScreenPermission, UserRecord
from vendas_client_sdk.permission_matrix import (
    build_permission_payload,
    ensure_unique_permission,
    find_permission,
    permissions_for_screen,
    users_with_access,
    users_without_access,
)
from vendas_client_sdk.screens import GRANTABLE_SCREENS

from ..app.logs import log_json

logger = logging.getLogger(__name__)

ACCESS_SCREEN = "Acessos"


@dataclass(frozen=True)
class ScreenAccessRow:
    screen_name: str
    title: str
    granted: list[UserRecord] = field(default_factory=list)
    missing: list[UserRecord] = field(default_factory=list)
    permissions: list[ScreenPermission] = field(default_factory=list)


class ScreenPermissionsService:
    """Per-user screen grants, one record per (user, screen)."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def _require_admin(self, actor: UserRecord | None, action: str) -> None:
        require(can_view_screen(actor, ACCESS_SCREEN), action, "only SUP or ADMIN can manage screen access")

    def load_matrix(self, actor: UserRecord | None) -> list[ScreenAccessRow]:
        self._require_admin(actor, "load_permissions")
        users = self.session.users().list(sort=NEWEST_FIRST)
        permissions = self.session.screen_permissions().list()
        logger.info("permission_matrix_loaded", extra={"users": len(users), "permissions": len(permissions)})
        return [
            ScreenAccessRow(
                screen_name=screen.name,
                title=screen.title,
                granted=users_with_access(screen.name, users, permissions),
                missing=users_without_access(screen.name, users, permissions),
                permissions=permissions_for_screen(screen.name, permissions),
            )
            for screen in GRANTABLE_SCREENS
        ]

    def grant(
        self,
        actor: UserRecord | None,
        screen_name: str,
        user: UserRecord,
        *,
        can_view: bool = True,
        can_edit: bool = False,
        can_delete: bool = False,
    ) -> ScreenPermission:
        self._require_admin(actor, "grant_permission")
        payload = build_permission_payload(
            screen_name, user, can_view=can_view, can_edit=can_edit, can_delete=can_delete
        )
        client = self.session.screen_permissions()
        # Re-read from the store so a grant made elsewhere is not duplicated.
        existing = client.filter({"user_id": user.id, "screen_name": screen_name})
        ensure_unique_permission(screen_name, user.id, existing)
        created = client.create(payload)
        log_json(logger, {"event": "permission_granted", "screen": screen_name, "user_id": user.id})
        return created

    def update_flags(
        self,
        actor: UserRecord | None,
        permission: ScreenPermission,
        *,
        can_view: bool,
        can_edit: bool,
        can_delete: bool,
    ) -> ScreenPermission:
        self._require_admin(actor, "update_permission")
        return self.session.screen_permissions().update(
            permission.id,
            {"can_view": can_view, "can_edit": can_edit, "can_delete": can_delete},
        )

    def revoke(self, actor: UserRecord | None, screen_name: str, user_id: str, permissions: list[ScreenPermission]) -> bool:
        self._require_admin(actor, "revoke_permission")
        permission = find_permission(screen_name, user_id, permissions)
        if permission is None:
            return False
        self.session.screen_permissions().delete(permission.id)
        log_json(logger, {"event": "permission_revoked", "screen": screen_name, "user_id": user_id})
        return True

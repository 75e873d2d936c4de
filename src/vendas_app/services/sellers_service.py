from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from vendas_client_sdk import ApiSession
from vendas_client_sdk.access_control import can_delete_seller, can_edit_seller, can_manage_sellers, require
from vendas_client_sdk.clients.entities import NEWEST_FIRST
from vendas_client_sdk.exceptions import PermissionDenied, ValidationError
from vendas_client_sdk.models import Role, UserRecord

from ..app.logs import log_json

logger = logging.getLogger(__name__)

ROLE_VALUES = tuple(role.value for role in Role)
EDITABLE_FIELDS = ("full_name", "phone", "role", "active")


def search_sellers(sellers: Iterable[UserRecord], term: str) -> list[UserRecord]:
    needle = term.strip().lower()
    if not needle:
        return list(sellers)
    return [
        seller
        for seller in sellers
        if needle in (seller.full_name or "").lower() or needle in (seller.email or "").lower()
    ]


def _is_sup(user: UserRecord) -> bool:
    return (user.role or "").upper() == Role.SUP.value


class SellersService:
    """Seller administration, with the role rules applied before every write."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def list_sellers(self, actor: UserRecord | None) -> list[UserRecord]:
        require(can_manage_sellers(actor), "list_sellers", "only SUP or ADMIN can manage sellers")
        return self.session.users().list(sort=NEWEST_FIRST)

    def update_seller(
        self,
        actor: UserRecord | None,
        subject: UserRecord,
        changes: Mapping[str, Any],
        sellers: Iterable[UserRecord] = (),
    ) -> UserRecord:
        require(can_edit_seller(actor, subject), "update_seller", "not allowed to edit this seller")
        payload = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}
        new_role = payload.get("role")
        if new_role is not None:
            new_role = str(new_role).upper()
            if new_role not in ROLE_VALUES:
                raise ValidationError("role", f"role must be one of {', '.join(ROLE_VALUES)}")
            payload["role"] = new_role
            if _is_sup(subject) and new_role != Role.SUP.value:
                raise PermissionDenied("update_seller", "the SUP role cannot be changed")
            if not _is_sup(subject) and new_role == Role.SUP.value:
                if any(_is_sup(seller) for seller in sellers if seller.id != subject.id):
                    raise PermissionDenied("update_seller", "there is already a SUP user")
        updated = self.session.users().update(subject.id, payload)
        logger.info("seller_updated", extra={"seller_id": subject.id, "fields": sorted(payload)})
        return updated

    def delete_seller(self, actor: UserRecord | None, subject: UserRecord) -> None:
        if _is_sup(subject):
            raise PermissionDenied("delete_seller", "O usuário SUP não pode ser excluído")
        require(can_delete_seller(actor, subject), "delete_seller", "not allowed to delete sellers")
        self.session.users().delete(subject.id)
        log_json(logger, {"event": "seller_deleted", "seller_id": subject.id, "actor_id": actor.id if actor else None})

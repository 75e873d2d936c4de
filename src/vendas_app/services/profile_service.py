from __future__ import annotations

import logging
import mimetypes

from vendas_client_sdk import ApiSession
from vendas_client_sdk.exceptions import ValidationError
from vendas_client_sdk.models import UserRecord

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def validate_password_change(
    new_password: str,
    confirmation: str,
    current_password: str | None = None,
    *,
    has_password: bool = False,
) -> None:
    """Check a password change before it is sent.

    The current password is only asked for when the account already has one;
    the store checks that it is correct.
    """
    if new_password != confirmation:
        raise ValidationError("confirm_password", "as senhas não coincidem")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError("new_password", f"a senha deve ter pelo menos {MIN_PASSWORD_LENGTH} caracteres")
    if has_password and not current_password:
        raise ValidationError("current_password", "informe a senha atual")


def _has_password(user: UserRecord | None) -> bool:
    return bool(user is not None and (user.model_extra or {}).get("password"))


class ProfileService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def update_profile(
        self,
        *,
        full_name: str,
        phone: str | None = None,
        current_password: str | None = None,
        new_password: str | None = None,
        confirm_password: str | None = None,
    ) -> UserRecord:
        if not full_name.strip():
            raise ValidationError("full_name", "informe o nome completo")
        changes: dict[str, str | None] = {"full_name": full_name.strip(), "phone": phone}
        if new_password or confirm_password:
            validate_password_change(
                new_password or "",
                confirm_password or "",
                current_password,
                has_password=_has_password(self.session.user),
            )
            if current_password:
                changes["current_password"] = current_password
            changes["password"] = new_password
        logger.info("profile_update_attempt", extra={"password_change": "password" in changes})
        user = self.session.auth_client().update_me(changes)
        self.session.remember_user(user)
        logger.info("profile_update_success", extra={"user_id": user.id})
        return user

    def upload_profile_photo(self, content: bytes, filename: str) -> UserRecord:
        if not content:
            raise ValidationError("profile_photo", "arquivo vazio")
        content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        if not content_type.startswith("image/"):
            raise ValidationError("profile_photo", "selecione uma imagem")
        uploaded = self.session.files_client().upload_file(content, filename, content_type)
        user = self.session.auth_client().update_me({"profile_photo": uploaded.url})
        self.session.remember_user(user)
        logger.info("profile_photo_updated", extra={"user_id": user.id})
        return user

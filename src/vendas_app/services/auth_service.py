from __future__ import annotations

import logging

from vendas_client_sdk import ApiSession
from vendas_client_sdk.models import TokenResponse, UserRecord

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return bool(self.session.token)

    def login(self, email: str, password: str) -> TokenResponse:
        logger.info("login_attempt")
        try:
            token = self.session.auth_client().login(email, password)
        except Exception:
            logger.exception("login_failure")
            raise
        self.session.establish(token)
        logger.info("login_success")
        return token

    def current_user(self) -> UserRecord:
        logger.info("profile_fetch_attempt")
        user = self.session.auth_client().me()
        self.session.remember_user(user)
        logger.info("profile_fetch_success", extra={"user_id": user.id, "role": user.role})
        return user

    def logout(self) -> None:
        logger.info("logout")
        self.session.logout()

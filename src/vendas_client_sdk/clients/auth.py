from __future__ import annotations

from typing import Any, Mapping

from ..models import TokenResponse, UserRecord
from .base import BaseClient, _expect_object


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> TokenResponse:
        data = self._request(
            "POST",
            "auth/login",
            json_body={"email": email, "password": password},
            module="auth",
            operation="login",
        )
        return TokenResponse.model_validate(_expect_object(data, "login"))

    def me(self) -> UserRecord:
        data = self._request("GET", "entities/User/me", module="auth", operation="me")
        return UserRecord.model_validate(_expect_object(data, "me"))

    def update_me(self, changes: Mapping[str, Any]) -> UserRecord:
        data = self._request(
            "PUT",
            "entities/User/me",
            json_body=dict(changes),
            module="auth",
            operation="update_me",
        )
        return UserRecord.model_validate(_expect_object(data, "update me"))

    def logout(self) -> None:
        self._request("POST", "auth/logout", module="auth", operation="logout")

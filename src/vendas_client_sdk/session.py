from __future__ import annotations

import logging
from dataclasses import dataclass

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.entities import EntityClient
from .clients.files import FilesClient
from .config import ClientConfig
from .exceptions import RemoteError
from .http_client import HttpClient
from .models import (
    Client,
    NegotiationType,
    Product,
    Sale,
    ScreenPermission,
    SessionData,
    TokenResponse,
    UserRecord,
)

logger = logging.getLogger(__name__)


@dataclass
class ApiSession:
    config: ClientConfig
    auth_store: AuthStore | None = None
    token: str | None = None
    user: UserRecord | None = None
    http: HttpClient | None = None

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.http = self.http or HttpClient(config=self.config)
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.access_token
            self.user = stored.user

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token)

    def files_client(self) -> FilesClient:
        return FilesClient(http=self.http, access_token=self.token)

    def products(self) -> EntityClient[Product]:
        return EntityClient(http=self.http, access_token=self.token, entity="Product", model=Product)

    def clients(self) -> EntityClient[Client]:
        return EntityClient(http=self.http, access_token=self.token, entity="Client", model=Client)

    def negotiation_types(self) -> EntityClient[NegotiationType]:
        return EntityClient(
            http=self.http,
            access_token=self.token,
            entity="NegotiationType",
            model=NegotiationType,
        )

    def sales(self) -> EntityClient[Sale]:
        return EntityClient(http=self.http, access_token=self.token, entity="Sale", model=Sale)

    def users(self) -> EntityClient[UserRecord]:
        return EntityClient(http=self.http, access_token=self.token, entity="User", model=UserRecord)

    def screen_permissions(self) -> EntityClient[ScreenPermission]:
        return EntityClient(
            http=self.http,
            access_token=self.token,
            entity="ScreenPermission",
            model=ScreenPermission,
        )

    def establish(self, token: TokenResponse, user: UserRecord | None = None) -> None:
        self.token = token.access_token
        self.user = user or token.user
        self.auth_store.save(SessionData(access_token=self.token, user=self.user, env_name=self.config.env_name))

    def remember_user(self, user: UserRecord) -> None:
        self.user = user
        if self.token:
            self.auth_store.save(SessionData(access_token=self.token, user=user, env_name=self.config.env_name))

    def logout(self) -> None:
        """Tell the store the session ended, then forget it locally either way."""
        if self.token:
            try:
                self.auth_client().logout()
            except RemoteError as exc:
                logger.warning("remote_logout_failed", extra={"code": exc.code, "status_code": exc.status_code})
        self.clear()

    def clear(self) -> None:
        self.token = None
        self.user = None
        if self.auth_store:
            self.auth_store.clear()

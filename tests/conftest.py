from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

import pytest
from pydantic import BaseModel

from vendas_client_sdk.auth_store import AuthStore
from vendas_client_sdk.config import ClientConfig
from vendas_client_sdk.exceptions import NotFoundError
from vendas_client_sdk.http_client import HttpClient
from vendas_client_sdk.models import (
    Client,
    NegotiationType,
    Product,
    Sale,
    ScreenPermission,
    TokenResponse,
    UploadedFile,
    UserRecord,
)

BASE_URL = "https://store.example.com"
APP_ID = "app-1"
CREATED_AT = datetime(2026, 10, 19, 9, 30)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "VENDAS_ENV",
        "VENDAS_API_BASE_URL",
        "VENDAS_API_BASE_URL_DEV",
        "VENDAS_APP_ID",
        "VENDAS_TIMEOUT_SECONDS",
        "VENDAS_CONNECT_TIMEOUT_SECONDS",
        "VENDAS_READ_TIMEOUT_SECONDS",
        "VENDAS_RETRIES",
        "VENDAS_RETRY_BACKOFF_SECONDS",
        "VENDAS_MAX_CONNECTIONS",
        "VENDAS_VERIFY_SSL",
        "VENDAS_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL, app_id=APP_ID, retry_backoff_seconds=0)


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config)


@pytest.fixture
def auth_store(tmp_path) -> AuthStore:
    return AuthStore(base_dir=tmp_path / "session")


@dataclass
class FakeEntityClient:
    entity: str
    model: type[Any]
    rows: list[Any] = field(default_factory=list)
    fail_create: Exception | None = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)
    _next_id: int = 1

    def list(self, sort: str | None = None, limit: int | None = None) -> list[Any]:
        self.calls.append(("list", sort, limit))
        rows = list(self.rows)
        return rows[:limit] if limit is not None else rows

    def filter(self, criteria: Mapping[str, Any], sort: str | None = None, limit: int | None = None) -> list[Any]:
        self.calls.append(("filter", dict(criteria), sort, limit))
        return [row for row in self.rows if all(getattr(row, key, None) == value for key, value in criteria.items())]

    def create(self, payload: BaseModel | Mapping[str, Any]) -> Any:
        self.calls.append(("create", payload))
        if self.fail_create is not None:
            raise self.fail_create
        data = payload.model_dump() if isinstance(payload, BaseModel) else dict(payload)
        data["id"] = f"{self.entity.lower()}-{self._next_id}"
        data.setdefault("created_date", CREATED_AT)
        self._next_id += 1
        record = self.model.model_validate(data)
        self.rows.append(record)
        return record

    def update(self, record_id: str, changes: BaseModel | Mapping[str, Any]) -> Any:
        self.calls.append(("update", record_id, changes))
        for index, row in enumerate(self.rows):
            if row.id == record_id:
                updated = self.model.model_validate({**row.model_dump(), **dict(changes)})
                self.rows[index] = updated
                return updated
        raise NotFoundError(code="NOT_FOUND", message="missing", details=None, trace_id=None, status_code=404)

    def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        before = len(self.rows)
        self.rows = [row for row in self.rows if row.id != record_id]
        if len(self.rows) == before:
            raise NotFoundError(code="NOT_FOUND", message="missing", details=None, trace_id=None, status_code=404)


@dataclass
class FakeAuthClient:
    user: UserRecord | None = None
    fail_me: Exception | None = None
    fail_login: Exception | None = None
    updates: list[dict[str, Any]] = field(default_factory=list)

    def login(self, email: str, password: str) -> TokenResponse:
        if self.fail_login is not None:
            raise self.fail_login
        return TokenResponse(access_token="token-1", user=self.user)

    def me(self) -> UserRecord:
        if self.fail_me is not None:
            raise self.fail_me
        assert self.user is not None
        return self.user

    def update_me(self, changes: Mapping[str, Any]) -> UserRecord:
        self.updates.append(dict(changes))
        assert self.user is not None
        public = {key: value for key, value in changes.items() if key not in {"password", "current_password"}}
        self.user = self.user.model_copy(update=public)
        return self.user


@dataclass
class FakeFilesClient:
    uploads: list[tuple[str, str]] = field(default_factory=list)

    def upload_file(self, content: bytes, filename: str, content_type: str = "application/octet-stream") -> UploadedFile:
        self.uploads.append((filename, content_type))
        return UploadedFile(url=f"https://files.example.com/{filename}")


class FakeSession:
    """Stands in for ApiSession with in-memory collections."""

    def __init__(self) -> None:
        self.token: str | None = "token-1"
        self.user: UserRecord | None = None
        self.logged_out = False
        self.auth = FakeAuthClient()
        self.files = FakeFilesClient()
        self.tables = {
            "Product": FakeEntityClient("Product", Product),
            "Client": FakeEntityClient("Client", Client),
            "NegotiationType": FakeEntityClient("NegotiationType", NegotiationType),
            "Sale": FakeEntityClient("Sale", Sale),
            "User": FakeEntityClient("User", UserRecord),
            "ScreenPermission": FakeEntityClient("ScreenPermission", ScreenPermission),
        }

    def products(self) -> FakeEntityClient:
        return self.tables["Product"]

    def clients(self) -> FakeEntityClient:
        return self.tables["Client"]

    def negotiation_types(self) -> FakeEntityClient:
        return self.tables["NegotiationType"]

    def sales(self) -> FakeEntityClient:
        return self.tables["Sale"]

    def users(self) -> FakeEntityClient:
        return self.tables["User"]

    def screen_permissions(self) -> FakeEntityClient:
        return self.tables["ScreenPermission"]

    def auth_client(self) -> FakeAuthClient:
        return self.auth

    def files_client(self) -> FakeFilesClient:
        return self.files

    def establish(self, token: TokenResponse, user: UserRecord | None = None) -> None:
        self.token = token.access_token
        self.user = user or token.user

    def remember_user(self, user: UserRecord) -> None:
        self.user = user

    def logout(self) -> None:
        self.logged_out = True
        self.clear()

    def clear(self) -> None:
        self.token = None
        self.user = None


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def sup() -> UserRecord:
    return UserRecord(id="u-sup", full_name="Ana Souza", email="sup@example.com", role="SUP", phone="1199")


@pytest.fixture
def admin() -> UserRecord:
    return UserRecord(id="u-admin", full_name="Bruno Lima", email="admin@example.com", role="ADMIN", phone="1198")


@pytest.fixture
def seller() -> UserRecord:
    return UserRecord(id="u-vend", full_name="Carla Dias", email="vend@example.com", role="VENDEDOR", phone="1197")

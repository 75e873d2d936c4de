from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

ENV_PREFIX = "VENDAS_"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    app_id: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 0
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def app_path(self) -> str:
        return f"/api/apps/{self.app_id}"


def _env(name: str) -> str:
    return f"{ENV_PREFIX}{name}"


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(_env(name), default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {_env(name)}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(_env(name), default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {_env(name)}: expected an integer, got {raw!r}") from exc


def _check(condition: bool, name: str, expectation: str, value: object) -> None:
    if not condition:
        raise ConfigError(f"Invalid {_env(name)}: expected {expectation}, got {value}")


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client configuration from ``VENDAS_*`` variables.

    A ``.env`` file is loaded first when present; real environment variables
    win over it. The base URL may be set per environment through
    ``VENDAS_API_BASE_URL_<ENV>``.
    """
    load_dotenv(env_file)

    env_name = (os.getenv(_env("ENV")) or "dev").strip()
    env_key = env_name.upper()
    api_base_url = (
        (os.getenv(_env(f"API_BASE_URL_{env_key}")) or "").strip()
        or (os.getenv(_env("API_BASE_URL")) or "").strip()
    )
    app_id = (os.getenv(_env("APP_ID")) or "").strip()

    missing = [
        name
        for name, value in ((_env("API_BASE_URL"), api_base_url), (_env("APP_ID"), app_id))
        if not value
    ]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")

    timeout_seconds = _read_float("TIMEOUT_SECONDS", "10")
    _check(timeout_seconds > 0, "TIMEOUT_SECONDS", "> 0", timeout_seconds)

    connect_timeout_seconds = _read_float("CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0)))
    _check(connect_timeout_seconds > 0, "CONNECT_TIMEOUT_SECONDS", "> 0", connect_timeout_seconds)

    read_timeout_seconds = _read_float(
        "READ_TIMEOUT_SECONDS", str(max(timeout_seconds, connect_timeout_seconds))
    )
    _check(read_timeout_seconds > 0, "READ_TIMEOUT_SECONDS", "> 0", read_timeout_seconds)

    # Only reads are ever retried; mutations go out exactly once.
    retries = _read_int("RETRIES", "0")
    _check(retries >= 0, "RETRIES", ">= 0", retries)

    retry_backoff_seconds = _read_float("RETRY_BACKOFF_SECONDS", "0.3")
    _check(retry_backoff_seconds >= 0, "RETRY_BACKOFF_SECONDS", ">= 0", retry_backoff_seconds)

    max_connections = _read_int("MAX_CONNECTIONS", "10")
    _check(max_connections >= 1, "MAX_CONNECTIONS", ">= 1", max_connections)

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        app_id=app_id,
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=_coerce_bool(os.getenv(_env("VERIFY_SSL")), True),
    )

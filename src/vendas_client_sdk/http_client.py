from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import RemoteError, TransportError

REQUEST_ID_HEADER = "X-Request-ID"
_RETRYABLE_METHODS = frozenset({"GET", "HEAD"})

JsonBody = dict[str, Any] | list[Any]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedError:
    code: str
    message: str
    trace_id: str | None
    type: str


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    request_id: str | None


def _error_type_from_status(status_code: int) -> str:
    if status_code <= 0:
        return "network"
    if status_code in {401, 403}:
        return "auth"
    if status_code in {400, 404, 422}:
        return "validation"
    if status_code == 409:
        return "conflict"
    return "internal"


@dataclass
class HttpClient:
    config: ClientConfig
    session: requests.Session | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: JsonBody | None = None,
        params: dict[str, Any] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        normalized_method = method.upper()
        request_id = str(uuid.uuid4())
        request_headers = {"Accept": "application/json", REQUEST_ID_HEADER: request_id}
        if headers:
            request_headers.update(headers)
        url = self._build_url(path)

        # Writes are sent once; a lost response must not duplicate a record.
        attempts = self.config.retries + 1 if normalized_method in _RETRYABLE_METHODS else 1
        started = time.monotonic()
        response: requests.Response | None = None
        for attempt in range(attempts):
            try:
                response = self.session.request(
                    method=normalized_method,
                    url=url,
                    headers=request_headers,
                    json=json_body if files is None else None,
                    params=params,
                    files=files,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if attempt >= attempts - 1:
                    self._record_operation(module, operation, started, "error", request_id)
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=request_id,
                        status_code=0,
                        raw_payload=None,
                    ) from exc
                logger.debug("http_retry", extra={"operation": operation, "attempt": attempt + 1})
            else:
                if response.status_code < 500 or attempt >= attempts - 1:
                    break
            time.sleep(self.config.retry_backoff_seconds * (2**attempt))

        if response is None:
            raise RuntimeError("HTTP request finished without a response")
        request_id = response.headers.get(REQUEST_ID_HEADER) or request_id

        if response.ok:
            self._record_operation(module, operation, started, "success", request_id)
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text}
        if not isinstance(payload, dict):
            payload = {"details": payload}
        self._record_operation(module, operation, started, "error", request_id)
        raise map_error(response.status_code, payload, request_id)

    def normalize_error(self, error: Exception) -> NormalizedError:
        if isinstance(error, TransportError):
            return NormalizedError(code=error.code, message=error.message, trace_id=error.trace_id, type="network")
        if isinstance(error, RemoteError):
            return NormalizedError(
                code=error.code,
                message=error.message,
                trace_id=error.trace_id,
                type=_error_type_from_status(error.status_code),
            )
        return NormalizedError(code="UNKNOWN_ERROR", message=str(error), trace_id=None, type="internal")

    def _record_operation(self, module: str, operation: str, started: float, result: str, request_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            request_id=request_id,
        )

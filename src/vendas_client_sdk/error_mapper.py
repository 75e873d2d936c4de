from __future__ import annotations

from typing import Mapping

from .exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RemoteError,
    RemoteValidationError,
    ServerError,
)

_BY_STATUS: dict[int, type[RemoteError]] = {
    400: RemoteValidationError,
    401: AuthError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: RemoteValidationError,
    429: RateLimitError,
}


def _message(payload: Mapping[str, object]) -> str:
    for key in ("message", "detail", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return "Request failed"


def map_error(status_code: int, payload: Mapping[str, object] | None, request_id: str | None) -> RemoteError:
    payload = payload or {}
    mapped = _BY_STATUS.get(status_code)
    if mapped is None:
        mapped = ServerError if status_code >= 500 else RemoteError
    payload_trace = payload.get("trace_id")
    return mapped(
        code=str(payload.get("code") or "HTTP_ERROR"),
        message=_message(payload),
        details=payload.get("details"),
        trace_id=str(payload_trace) if payload_trace is not None else request_id,
        status_code=status_code,
        raw_payload=dict(payload),
    )

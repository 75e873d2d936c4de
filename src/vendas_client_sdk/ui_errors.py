from __future__ import annotations

from dataclasses import dataclass

from .exceptions import PermissionDenied, RemoteError, TransportError, ValidationError


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None


def to_user_facing_error(exc: Exception) -> UserFacingError:
    if isinstance(exc, TransportError):
        return UserFacingError(
            message="Não foi possível conectar ao servidor",
            details=exc.message,
            trace_id=exc.trace_id,
        )
    if isinstance(exc, RemoteError):
        details = f"{exc.code} (HTTP {exc.status_code})"
        if exc.details:
            details = f"{details}: {exc.details}"
        return UserFacingError(message=exc.message.strip() or "Request failed", details=details, trace_id=exc.trace_id)
    if isinstance(exc, ValidationError):
        return UserFacingError(message=exc.reason, details=exc.field)
    if isinstance(exc, PermissionDenied):
        return UserFacingError(message=exc.reason, details=exc.action)
    return UserFacingError(message=str(exc) or "Unexpected client error")

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RemoteError(Exception):
    """The entity store answered with an error, or could not be reached."""

    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"


class AuthError(RemoteError):
    """Authentication failed or the session token is no longer valid."""


class ForbiddenError(RemoteError):
    pass


class NotFoundError(RemoteError):
    pass


class RemoteValidationError(RemoteError):
    """The store rejected the payload (400/422)."""


class ConflictError(RemoteError):
    pass


class RateLimitError(RemoteError):
    pass


class ServerError(RemoteError):
    pass


class TransportError(RemoteError):
    """Network failure before an HTTP response was returned."""


class InvalidResponseError(RemoteError):
    """The store answered 2xx with a body that is not the expected record.

    The write may have been applied, so callers must not blindly resend it.
    """


class ValidationError(ValueError):
    """Invalid input or state transition detected before any remote call."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class PermissionDenied(Exception):
    """An action was refused by the role checks of the console.

    The checks run on the client and only hide or refuse UI actions. They do
    not protect the data held by the entity store.
    """

    def __init__(self, action: str, reason: str) -> None:
        self.action = action
        self.reason = reason
        super().__init__(f"{action}: {reason}")

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from vendas_client_sdk.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PermissionDenied,
    RemoteError,
    RemoteValidationError,
    ServerError,
    TransportError,
    ValidationError,
)


@dataclass(frozen=True)
class PresentedError:
    category: str
    user_message: str
    safe_to_retry: bool
    code: str
    details: dict[str, Any]


class ErrorPresenter:
    """Turns client and store failures into messages the screens can show."""

    _CATEGORY_MESSAGES = {
        "validation": "Revise os dados informados e tente novamente.",
        "permission_denied": "Você não tem permissão para executar esta ação.",
        "session": "Sua sessão expirou. Entre novamente.",
        "conflict": "A ação não pode ser concluída no estado atual.",
        "not_found": "O registro não foi encontrado.",
        "transport": "Falha de conexão. Tente novamente.",
        "server": "Erro no servidor. Tente novamente em instantes.",
        "unknown": "Erro inesperado. Tente novamente.",
    }

    # Most specific first.
    _CATEGORIES: tuple[tuple[type[Exception], str], ...] = (
        (ValidationError, "validation"),
        (RemoteValidationError, "validation"),
        (PermissionDenied, "permission_denied"),
        (ForbiddenError, "permission_denied"),
        (AuthError, "session"),
        (ConflictError, "conflict"),
        (NotFoundError, "not_found"),
        (TransportError, "transport"),
        (ServerError, "server"),
    )

    def present(self, exc: Exception, *, action: str, allow_retry: bool = False) -> PresentedError:
        category = next((name for kind, name in self._CATEGORIES if isinstance(exc, kind)), "unknown")
        code = exc.code if isinstance(exc, RemoteError) else type(exc).__name__
        user_message = self._CATEGORY_MESSAGES[category]
        if isinstance(exc, (ValidationError, PermissionDenied)):
            user_message = exc.reason
        return PresentedError(
            category=category,
            user_message=user_message,
            safe_to_retry=allow_retry and category in {"transport", "server"},
            code=code.upper(),
            details={
                "action": action,
                "trace_id": getattr(exc, "trace_id", None),
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "raw_details": getattr(exc, "details", None),
            },
        )

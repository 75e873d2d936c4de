from __future__ import annotations

import logging
from dataclasses import dataclass

from vendas_client_sdk import ApiSession, ClientConfig, load_config, to_user_facing_error
from vendas_client_sdk.access_control import can_view_screen, needs_profile_setup
from vendas_client_sdk.exceptions import AuthError, PermissionDenied, RemoteError

from ..services.auth_service import AuthService
from .navigation import DEFAULT_SCREEN, NavItem, navigation_for, user_initials
from .state import AppState, Route

logger = logging.getLogger(__name__)


@dataclass
class BootstrapResult:
    route: Route
    error_message: str | None = None


class ConsoleBootstrap:
    def __init__(self, config: ClientConfig | None = None, session: ApiSession | None = None) -> None:
        self.config = config or (session.config if session else load_config())
        self.session = session or ApiSession(self.config)
        self.state = AppState()
        self.auth_service = AuthService(self.session)

    def start(self) -> BootstrapResult:
        if not self.auth_service.has_active_session():
            self._navigate(Route.LOGIN, "No active session")
            return BootstrapResult(route=self.state.route)
        return self._load_shell()

    def login(self, email: str, password: str) -> BootstrapResult:
        try:
            self.auth_service.login(email, password)
        except RemoteError as exc:
            self.state.error_message = to_user_facing_error(exc).message
            self._navigate(Route.LOGIN, "Authentication failed")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        return self._load_shell()

    def logout(self) -> BootstrapResult:
        self.auth_service.logout()
        self.state.actor = None
        self.state.initials = ""
        self.state.screens = []
        self.state.current_screen = None
        self._navigate(Route.LOGIN, "Session cleared")
        return BootstrapResult(route=self.state.route)

    def open_screen(self, screen_name: str) -> None:
        if not can_view_screen(self.state.actor, screen_name):
            raise PermissionDenied("open_screen", f"{screen_name} is not available for this user")
        self.state.current_screen = screen_name

    def visible_navigation(self) -> list[NavItem]:
        return navigation_for(self.state.actor)

    def _load_shell(self) -> BootstrapResult:
        try:
            actor = self.auth_service.current_user()
        except AuthError as exc:
            # Stored token expired or was revoked.
            self.session.clear()
            self.state.error_message = to_user_facing_error(exc).message
            self._navigate(Route.LOGIN, "Session expired")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)
        except RemoteError as exc:
            self.state.error_message = to_user_facing_error(exc).message
            self._navigate(Route.LOGIN, "Failed to load profile")
            return BootstrapResult(route=self.state.route, error_message=self.state.error_message)

        self.state.actor = actor
        self.state.initials = user_initials(actor)
        self.state.screens = self.visible_navigation()
        self.state.error_message = None
        if needs_profile_setup(actor):
            self._navigate(Route.PROFILE_SETUP, "Profile setup required")
            return BootstrapResult(route=self.state.route)
        self.state.current_screen = DEFAULT_SCREEN if can_view_screen(actor, DEFAULT_SCREEN) else None
        self._navigate(Route.SHELL, "Authenticated")
        logger.info("shell_ready", extra={"user_id": actor.id, "screens": len(self.state.screens)})
        return BootstrapResult(route=self.state.route)

    def _navigate(self, route: Route, status_message: str) -> None:
        logger.info("navigation", extra={"route": route.value})
        self.state.route = route
        self.state.status_message = status_message

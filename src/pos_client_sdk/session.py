from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .clients.auth import AuthClient
from .exceptions import ApiError, AuthError
from .http_client import HttpClient
from .models import Role, UserIdentity
from .telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Login failed"


class SessionPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


@dataclass(frozen=True)
class SessionState:
    phase: SessionPhase = SessionPhase.UNINITIALIZED
    user: UserIdentity | None = None

    @property
    def authenticated(self) -> bool:
        return self.user is not None

    @property
    def loading(self) -> bool:
        return self.phase in (SessionPhase.UNINITIALIZED, SessionPhase.LOADING)

    @property
    def role(self) -> Role | None:
        return self.user.role if self.user is not None else None


SessionListener = Callable[[SessionState], None]


class SessionStore:
    """Who is signed in, and whether that is still being determined.

    Built on an injected ``HttpClient``; the gateway owns the credential and
    tells the store about 401 responses through its auth-error handlers, so
    the session drops to unauthenticated before the error reaches the caller.
    """

    def __init__(self, http: HttpClient, telemetry: TelemetryLogger | None = None) -> None:
        self.http = http
        self.telemetry = telemetry
        self._auth = AuthClient(http=http)
        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self._initialized = False
        http.register_auth_error_handler(self._on_auth_error)

    async def __aenter__(self) -> "SessionStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.dispose()

    @property
    def state(self) -> SessionState:
        return SessionState(phase=self._state.phase, user=self._state.user)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def initialize(self) -> SessionState:
        if self._initialized:
            return self.state
        self._initialized = True
        self._transition(SessionState(phase=SessionPhase.LOADING))

        if not self.http.has_credential:
            self._transition(SessionState(phase=SessionPhase.UNAUTHENTICATED))
            self._emit("session", "session_restore", success=False, error_code="NO_CREDENTIAL")
            return self.state

        try:
            user = await self._auth.profile()
        except Exception as exc:
            logger.info("session_restore_failed", extra={"error_type": type(exc).__name__})
            self.http.clear_credential()
            self._transition(SessionState(phase=SessionPhase.UNAUTHENTICATED))
            self._emit("session", "session_restore", success=False, error_code=_error_code(exc))
            return self.state

        self._transition(SessionState(phase=SessionPhase.AUTHENTICATED, user=user))
        logger.info("session_restored", extra={"user_id": user.id, "role": user.role.value})
        self._emit("session", "session_restore", success=True)
        return self.state

    async def login(self, username: str, password: str) -> UserIdentity:
        try:
            result = await self._auth.login(username, password)
        except AuthError as exc:
            self._emit("auth", "login", success=False, status_code=exc.status_code, error_code=exc.code)
            raise
        except ApiError as exc:
            self._emit("auth", "login", success=False, error_code=_error_code(exc))
            raise _login_failure(exc) from exc

        self.http.set_credential(result.token)
        self._initialized = True
        self._transition(SessionState(phase=SessionPhase.AUTHENTICATED, user=result.user))
        logger.info("login_succeeded", extra={"user_id": result.user.id, "role": result.user.role.value})
        self._emit("auth", "login", success=True)
        return result.user

    def logout(self) -> None:
        was_authenticated = self._state.authenticated
        self.http.clear_credential()
        self._initialized = True
        self._transition(SessionState(phase=SessionPhase.UNAUTHENTICATED))
        if was_authenticated:
            logger.info("logout")
            self._emit("auth", "logout", success=True)

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self._auth.change_password(current_password, new_password)
        self._emit("auth", "change_password", success=True)

    async def refresh_profile(self) -> UserIdentity:
        user = await self._auth.profile()
        self._transition(SessionState(phase=SessionPhase.AUTHENTICATED, user=user))
        return user

    async def refresh_credential(self) -> None:
        """Swap the stored token for a fresh one issued by the server."""
        token = await self._auth.refresh_token()
        self.http.set_credential(token)
        self._emit("auth", "token_refresh", success=True)

    async def dispose(self) -> None:
        """Detach from the gateway. The ``HttpClient`` stays open for its owner."""
        self.http.unregister_auth_error_handler(self._on_auth_error)
        self._listeners.clear()

    def _on_auth_error(self, error: AuthError) -> None:
        if self._state.phase is SessionPhase.UNAUTHENTICATED:
            return
        logger.info("session_expired", extra={"status_code": error.status_code})
        self._transition(SessionState(phase=SessionPhase.UNAUTHENTICATED))
        self._emit("session", "session_expired", success=False, status_code=error.status_code, error_code=error.code)

    def _transition(self, new_state: SessionState) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)

    def _emit(
        self,
        category: str,
        action: str,
        *,
        success: bool,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        if self.telemetry is None:
            return
        event = build_event(
            category=category,
            name=f"{category}_{action}",
            module="session",
            action=action,
            success=success,
            status_code=status_code,
            error_code=error_code,
        )
        try:
            self.telemetry.emit(event)
        except Exception:
            logger.exception("telemetry_emit_failed", extra={"action": action})


def _error_code(exc: Exception) -> str:
    if isinstance(exc, ApiError):
        return exc.code
    return type(exc).__name__


def _login_failure(exc: ApiError) -> AuthError:
    return AuthError(
        code=exc.code,
        message=exc.message or LOGIN_FAILED_MESSAGE,
        details=exc.details,
        status_code=exc.status_code,
        raw_payload=exc.raw_payload,
    )

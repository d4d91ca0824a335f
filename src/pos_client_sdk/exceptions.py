from __future__ import annotations

from dataclasses import dataclass

GENERIC_FAILURE_MESSAGE = "Request failed"


@dataclass
class ApiError(Exception):
    """A request reached the backend but did not produce a payload."""

    code: str
    message: str
    details: object | None = None
    status_code: int = 0
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"


class NetworkError(ApiError):
    """Network/transport failure or timeout before an HTTP response was returned."""


class AuthError(ApiError):
    """Authentication failed or the session is no longer valid."""


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class ServerError(ApiError):
    """5xx server-side failures."""


def to_user_facing_error(error: Exception) -> str:
    if isinstance(error, NetworkError):
        return "Cannot reach the POS server. Check your connection and try again."
    if isinstance(error, AuthError):
        return error.message or "Your session has expired. Please sign in again."
    if isinstance(error, ApiError):
        return error.message or GENERIC_FAILURE_MESSAGE
    return str(error) or "Unexpected client error"

from __future__ import annotations

from typing import Mapping

from .exceptions import (
    GENERIC_FAILURE_MESSAGE,
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    ValidationError,
)


def failure_message(payload: Mapping[str, object] | None, fallback: str = GENERIC_FAILURE_MESSAGE) -> str:
    payload = payload or {}
    for key in ("message", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return fallback


def map_error(status_code: int, payload: Mapping[str, object] | None) -> ApiError:
    payload = payload or {}
    message = failure_message(payload)
    details = payload.get("details")
    if details is None and payload.get("message") and payload.get("error"):
        details = payload.get("error")
    mapped: type[ApiError]
    if status_code == 401:
        mapped, code = AuthError, "UNAUTHORIZED"
    elif status_code == 403:
        mapped, code = ForbiddenError, "FORBIDDEN"
    elif status_code == 404:
        mapped, code = NotFoundError, "NOT_FOUND"
    elif status_code in {400, 422}:
        mapped, code = ValidationError, "VALIDATION_ERROR"
    elif status_code == 409:
        mapped, code = ConflictError, "CONFLICT"
    elif status_code >= 500:
        mapped, code = ServerError, "SERVER_ERROR"
    else:
        mapped, code = ApiError, "HTTP_ERROR"
    return mapped(
        code=str(payload.get("code") or code),
        message=message,
        details=details,
        status_code=status_code,
        raw_payload=dict(payload),
    )

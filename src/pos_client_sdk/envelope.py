"""Response envelope handling.

Every endpoint answers with ``{"data": ..., "message": ...}``; the legacy
shape adds ``"success": true``.  Only the presence of ``data`` decides
success, the ``success`` flag is never trusted.  List endpoints put the
page either inside ``data`` (``{"data": {"data": [...], "pagination": {}}}``)
or next to it (``{"data": [...], "pagination": {}}``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .error_mapper import failure_message
from .exceptions import ApiError

EMPTY_ENVELOPE = "EMPTY_ENVELOPE"
MALFORMED_PAGE = "MALFORMED_PAGE"
MALFORMED_RESPONSE = "MALFORMED_RESPONSE"

ModelT = TypeVar("ModelT", bound=BaseModel)


def has_data(payload: object) -> bool:
    return isinstance(payload, Mapping) and payload.get("data") is not None


def unwrap(payload: object, *, status_code: int = 200, allow_empty: bool = False) -> Any:
    if has_data(payload):
        return payload["data"]  # type: ignore[index]
    if allow_empty:
        return None
    body = payload if isinstance(payload, Mapping) else {}
    raise ApiError(
        code=EMPTY_ENVELOPE,
        message=failure_message(body),
        details=None,
        status_code=status_code,
        raw_payload=payload,
    )


def unwrap_page(payload: object, *, status_code: int = 200, rows_key: str = "data") -> dict[str, Any]:
    """Return the ``{"data": [...], "pagination": {...}}`` block of a list response.

    ``rows_key`` names the list inside a nested page for endpoints that do
    not call it ``data`` (notifications use ``notifications``).
    """
    if isinstance(payload, Mapping) and "data" in payload and isinstance(payload.get("pagination"), Mapping):
        # flat shape; an empty page comes back as an explicit "data": null
        rows = payload["data"]
        if rows is None or isinstance(rows, list):
            return {"data": rows or [], "pagination": payload["pagination"]}
    data = unwrap(payload, status_code=status_code)
    if isinstance(data, Mapping) and isinstance(data.get("pagination"), Mapping):
        return {"data": data.get(rows_key) or [], "pagination": data["pagination"]}
    raise ApiError(
        code=MALFORMED_PAGE,
        message="List response is missing pagination",
        details=None,
        status_code=status_code,
        raw_payload=payload,
    )


def decode(model: type[ModelT], data: object, *, status_code: int = 200) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        raise ApiError(
            code=MALFORMED_RESPONSE,
            message=f"Unexpected {model.__name__} payload from server",
            details=exc.errors(include_url=False),
            status_code=status_code,
            raw_payload=data,
        ) from exc

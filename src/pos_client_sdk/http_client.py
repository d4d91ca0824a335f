from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from .auth_store import AuthStore, MemoryAuthStore
from .config import ClientConfig
from .envelope import decode, unwrap, unwrap_page
from .error_mapper import map_error
from .exceptions import AuthError, NetworkError
from .models import Paginated
from .telemetry import TelemetryLogger, build_event

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
AuthErrorHandler = Callable[[AuthError], None]

DEFAULT_HEADERS = {"Accept": "application/json"}


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    status_code: int


class HttpClient:
    """The only network boundary of the SDK.

    Attaches the bearer credential, unwraps the response envelope and turns
    every failure into a typed error.  A 401 clears the credential and
    notifies the registered auth-error handlers before the error is raised.
    No retries, no caching.
    """

    def __init__(
        self,
        config: ClientConfig,
        auth_store: AuthStore | MemoryAuthStore | None = None,
        client: httpx.AsyncClient | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.config = config
        self.auth_store = auth_store if auth_store is not None else AuthStore(app_name=config.app_name)
        self._client = client or httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=config.timeout_seconds,
            verify=config.verify_ssl,
        )
        self.telemetry = telemetry
        self._auth_error_handlers: list[AuthErrorHandler] = []
        self._token: str | None = self.auth_store.load_token()
        self.last_operation: LastOperation | None = None

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def has_credential(self) -> bool:
        return bool(self._token)

    def set_credential(self, token: str) -> None:
        if not token or not token.strip():
            raise ValueError("token must not be empty")
        self._token = token
        self.auth_store.save_token(token)

    def clear_credential(self) -> None:
        self._token = None
        self.auth_store.clear()

    def register_auth_error_handler(self, handler: AuthErrorHandler) -> None:
        if handler not in self._auth_error_handlers:
            self._auth_error_handlers.append(handler)

    def unregister_auth_error_handler(self, handler: AuthErrorHandler) -> None:
        if handler in self._auth_error_handlers:
            self._auth_error_handlers.remove(handler)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
        allow_empty: bool = False,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> Any:
        status_code, payload = await self._send(
            method,
            path,
            json_body=json_body,
            params=params,
            files=files,
            module=module,
            operation=operation,
        )
        return unwrap(payload, status_code=status_code, allow_empty=allow_empty)

    async def request_page(
        self,
        path: str,
        *,
        model: type[ModelT] | None = None,
        params: Mapping[str, Any] | None = None,
        rows_key: str = "data",
        module: str = "unknown",
        operation: str = "unknown",
    ) -> Paginated[Any]:
        status_code, payload = await self._send(
            "GET",
            path,
            json_body=None,
            params=params,
            files=None,
            module=module,
            operation=operation,
        )
        block = unwrap_page(payload, status_code=status_code, rows_key=rows_key)
        page_type = Paginated[model] if model is not None else Paginated[dict[str, Any]]
        return decode(page_type, block, status_code=status_code)

    async def health(self) -> bool:
        try:
            response = await self._client.get(
                self.config.resolved_health_url,
                headers=DEFAULT_HEADERS,
                timeout=self.config.health_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            logger.warning("health_check_failed", extra={"error_type": type(exc).__name__})
            return False
        return response.is_success

    def _headers(self, *, multipart: bool) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if not multipart:
            headers["Content-Type"] = "application/json"
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    @staticmethod
    def _normalize_path(path: str) -> str:
        if "://" in path or path.startswith("//"):
            raise ValueError(f"path must be relative to the API base URL, got {path!r}")
        return path if path.startswith("/") else f"/{path}"

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json_body: Mapping[str, Any] | None,
        params: Mapping[str, Any] | None,
        files: Mapping[str, Any] | None,
        module: str,
        operation: str,
    ) -> tuple[int, Any]:
        normalized_method = method.upper()
        url = self._normalize_path(path)
        headers = self._headers(multipart=files is not None)
        query = {key: value for key, value in (params or {}).items() if value is not None}
        started = time.monotonic()
        logger.debug(
            "api_request",
            extra={"method": normalized_method, "path": url, "has_auth": "Authorization" in headers},
        )
        try:
            response = await self._client.request(
                normalized_method,
                url,
                headers=headers,
                json=dict(json_body) if json_body is not None else None,
                params=query or None,
                files=files,
                timeout=self.config.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            self._record_operation(module, operation, started, "timeout", 0)
            raise NetworkError(
                code="TIMEOUT",
                message=f"No response from the POS server within {self.config.timeout_seconds:g}s",
                details={"type": type(exc).__name__},
                status_code=0,
            ) from exc
        except httpx.TransportError as exc:
            self._record_operation(module, operation, started, "network_error", 0)
            raise NetworkError(
                code="NETWORK_ERROR",
                message="Cannot reach the POS server",
                details={"type": type(exc).__name__, "reason": str(exc)},
                status_code=0,
            ) from exc

        payload = self._decode_body(response)
        if response.status_code >= 400:
            error = map_error(response.status_code, payload if isinstance(payload, Mapping) else None)
            if isinstance(error, AuthError):
                self._invalidate_session(error)
            self._record_operation(module, operation, started, "error", response.status_code)
            raise error

        self._record_operation(module, operation, started, "success", response.status_code)
        return response.status_code, payload

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"message": response.text}

    def _invalidate_session(self, error: AuthError) -> None:
        logger.info("session_invalidated", extra={"status_code": error.status_code})
        self.clear_credential()
        for handler in list(self._auth_error_handlers):
            handler(error)

    def _record_operation(self, module: str, operation: str, started: float, result: str, status_code: int) -> None:
        duration_ms = int((time.monotonic() - started) * 1000)
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=duration_ms,
            result=result,
            status_code=status_code,
        )
        if self.telemetry is None:
            return
        event = build_event(
            category="api_call_result",
            name="api_call",
            module=module,
            action=operation,
            duration_ms=duration_ms,
            success=result == "success",
            status_code=status_code or None,
            error_code=None if result == "success" else result,
        )
        try:
            self.telemetry.emit(event)
        except Exception:
            logger.exception("telemetry_emit_failed", extra={"module": module, "operation": operation})

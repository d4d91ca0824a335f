from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from pos_client_sdk.auth_store import MemoryAuthStore
from pos_client_sdk.config import ClientConfig
from pos_client_sdk.http_client import HttpClient
from pos_client_sdk.telemetry import TelemetryLogger

API_BASE_URL = "http://pos.test/api/v1"
API_PREFIX = "/api/v1"

Reply = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Scripted replies keyed by method and API path (without the /api/v1 prefix)."""

    def __init__(self) -> None:
        self._replies: dict[tuple[str, str], list[Reply]] = {}
        self._served: dict[tuple[str, str], Reply] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, status: int = 200, json: Any = None) -> None:
        self._add(method, path, lambda request: httpx.Response(status, json=json))

    def on_text(self, method: str, path: str, status: int, text: str) -> None:
        self._add(method, path, lambda request: httpx.Response(status, text=text))

    def on_raise(self, method: str, path: str, error: type[httpx.HTTPError]) -> None:
        def reply(request: httpx.Request) -> httpx.Response:
            raise error("simulated failure", request=request)

        self._add(method, path, reply)

    def _add(self, method: str, path: str, reply: Reply) -> None:
        self._replies.setdefault((method.upper(), path), []).append(reply)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        key = (request.method, path)
        queue = self._replies.get(key)
        if queue:
            # each reply is served once; the last one keeps answering
            self._served[key] = queue.pop(0)
        reply = self._served.get(key)
        if reply is None:
            return httpx.Response(404, json={"error": f"no route for {request.method} {path}"})
        return reply(request)

    def last(self) -> httpx.Request:
        return self.requests[-1]

    def paths(self) -> list[str]:
        return [f"{request.method} {request.url.path}" for request in self.requests]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=API_BASE_URL)


@pytest.fixture
def make_http(backend: FakeBackend, config: ClientConfig) -> Callable[..., HttpClient]:
    def factory(
        token: str | None = None,
        store: MemoryAuthStore | None = None,
        telemetry: TelemetryLogger | None = None,
    ) -> HttpClient:
        client = httpx.AsyncClient(base_url=config.api_base_url, transport=httpx.MockTransport(backend.handler))
        return HttpClient(
            config,
            auth_store=store if store is not None else MemoryAuthStore(token),
            client=client,
            telemetry=telemetry,
        )

    return factory


def user_payload(role: str = "admin", user_id: int = 1, username: str = "admin") -> dict[str, Any]:
    return {
        "id": user_id,
        "username": username,
        "role": role,
        "isActive": True,
        "full_name": username.title(),
        "email": f"{username}@showroom.test",
    }

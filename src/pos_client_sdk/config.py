from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlsplit

from dotenv import load_dotenv

DEFAULT_API_BASE_URL = "http://localhost:8080/api/v1"
DEFAULT_APP_NAME = "showroom-pos"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    health_url: str | None = None
    timeout_seconds: float = 10.0
    health_timeout_seconds: float = 5.0
    verify_ssl: bool = True
    app_name: str = DEFAULT_APP_NAME

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def resolved_health_url(self) -> str:
        if self.health_url:
            return self.health_url
        return default_health_url(self.api_base_url)


def default_health_url(api_base_url: str) -> str:
    """The liveness endpoint lives at the origin root, outside the versioned API prefix."""
    parts = urlsplit(api_base_url)
    if not parts.scheme or not parts.netloc:
        return api_base_url.rstrip("/") + "/health"
    return f"{parts.scheme}://{parts.netloc}/health"


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _validate_url(name: str, value: str) -> None:
    parts = urlsplit(value)
    _validate(
        parts.scheme in {"http", "https"} and bool(parts.netloc),
        f"Invalid {name}: expected an http(s) URL, got {value!r}",
    )


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("POS_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"POS_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("POS_API_BASE_URL") or "").strip()
        or DEFAULT_API_BASE_URL
    )
    _validate_url("POS_API_BASE_URL", api_base_url)

    health_url = (os.getenv("POS_HEALTH_URL") or "").strip() or None
    if health_url:
        _validate_url("POS_HEALTH_URL", health_url)

    timeout_seconds = _read_float("POS_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid POS_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    health_timeout_seconds = _read_float(
        "POS_HEALTH_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        health_timeout_seconds > 0,
        f"Invalid POS_HEALTH_TIMEOUT_SECONDS: expected > 0, got {health_timeout_seconds}",
    )

    verify_ssl = _coerce_bool(os.getenv("POS_VERIFY_SSL"), True)

    app_name = (os.getenv("POS_APP_NAME") or DEFAULT_APP_NAME).strip()
    _validate(bool(app_name), "Invalid POS_APP_NAME: must not be blank")

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        health_url=health_url,
        timeout_seconds=timeout_seconds,
        health_timeout_seconds=health_timeout_seconds,
        verify_ssl=verify_ssl,
        app_name=app_name,
    )

"""Structured event hook shared by the gateway and the session store.

Events are plain records; where they end up is the host application's call.
``TelemetryLogger`` stays off until ``POS_TELEMETRY_ENABLED`` is set (or
``enabled=True`` is passed) and then forwards every event to the
``pos_client_sdk.telemetry`` logger, an optional JSONL file and an optional
callback.  Records never carry credentials: ``build_event`` refuses them.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

event_logger = logging.getLogger("pos_client_sdk.telemetry")

TELEMETRY_CATEGORIES = frozenset({"auth", "session", "navigation", "api_call_result", "error"})
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "old_password",
        "new_password",
        "token",
        "auth_token",
        "authorization",
        "email",
        "phone",
        "address",
    }
)
_TRUTHY = {"1", "true", "yes", "on"}

EventSink = Callable[[dict[str, Any]], None]


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    module: str
    action: str
    timestamp_utc: str
    status_code: int | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def as_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is not None:
                record[item.name] = value
        return record


def build_event(
    category: str,
    name: str,
    *,
    module: str,
    action: str,
    now: datetime | None = None,
    **outcome: Any,
) -> TelemetryEvent:
    """``outcome`` takes the optional ``TelemetryEvent`` fields (status_code, success, ...)."""
    if category not in TELEMETRY_CATEGORIES:
        raise ValueError(f"Unknown telemetry category {category!r}; expected one of {sorted(TELEMETRY_CATEGORIES)}")
    leaked = sorted(key for key in (outcome.get("context") or {}) if key.lower() in SENSITIVE_KEYS)
    if leaked:
        raise ValueError(f"Credential or PII keys are forbidden in telemetry context: {leaked}")
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return TelemetryEvent(category, name, module, action, timestamp, **outcome)


class TelemetryLogger:
    def __init__(
        self,
        *,
        app_name: str,
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        sink: EventSink | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = _env_flag("POS_TELEMETRY_ENABLED") if enabled is None else enabled
        self.log_file = Path(log_file) if log_file else None
        self.sink = sink

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        record = {"app_name": self.app_name, **event.as_record()}
        event_logger.info(event.name, extra={"telemetry": record})
        if self.log_file is not None:
            _append_jsonl(self.log_file, record)
        if self.sink is not None:
            self.sink(record)
        return True


def _append_jsonl(path: Path, record: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, sort_keys=True) + "\n")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY

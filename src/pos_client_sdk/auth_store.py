from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"


@dataclass
class AuthStore:
    """Durable bearer-token storage that survives process restarts."""

    app_name: str = "showroom-pos"
    filename: str = "credentials.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "ShowroomPOS"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save_token(self, token: str) -> None:
        path = self._path()
        path.write_text(json.dumps({TOKEN_KEY: token}, indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def load_token(self) -> str | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError):
            logger.warning("credential_store_corrupt", extra={"path": str(path)})
            self.clear()
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            self.clear()
            return None
        return token

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()


@dataclass
class MemoryAuthStore:
    """Process-local token storage for tests and ephemeral shells."""

    token: str | None = None

    def save_token(self, token: str) -> None:
        self.token = token

    def load_token(self) -> str | None:
        return self.token

    def clear(self) -> None:
        self.token = None

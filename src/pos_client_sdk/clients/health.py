from __future__ import annotations

from .base import BaseClient


class HealthClient(BaseClient):
    module = "health"

    async def check(self) -> bool:
        return await self.http.health()

from __future__ import annotations

from typing import Any

from ..models import Role
from .base import BaseClient


class DashboardClient(BaseClient):
    """Role-specific dashboard statistics; the payload shape differs per role."""

    module = "dashboard"

    async def stats(self, role: Role | str) -> dict[str, Any]:
        segment = Role.parse(role).dashboard_segment
        data = await self._request("GET", f"/{segment}/dashboard", operation=f"{segment}_stats")
        return dict(data) if isinstance(data, dict) else {"value": data}

from __future__ import annotations

from ..models import Paginated
from ..models_workshop import Notification
from .base import DEFAULT_PAGE_SIZE, BaseClient


class NotificationsClient(BaseClient):
    module = "notifications"

    async def list(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Paginated[Notification]:
        return await self._page(
            "/notifications",
            model=Notification,
            operation="list",
            page=page,
            limit=limit,
            rows_key="notifications",
        )

    async def mark_read(self, notification_id: int) -> None:
        await self._request(
            "PUT", f"/notifications/{notification_id}/read", allow_empty=True, operation="mark_read"
        )

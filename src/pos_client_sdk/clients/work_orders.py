from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated
from ..models_workshop import WorkOrder, WorkOrderStatus
from .base import DEFAULT_PAGE_SIZE, BaseClient


class WorkOrdersClient(BaseClient):
    module = "work_orders"

    async def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: WorkOrderStatus | str | None = None,
    ) -> Paginated[WorkOrder]:
        return await self._page(
            "/work-orders",
            model=WorkOrder,
            operation="list",
            page=page,
            limit=limit,
            filters={"status": WorkOrderStatus(status).value if status else None},
        )

    async def my(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Paginated[WorkOrder]:
        """Work orders assigned to the signed-in mechanic."""
        return await self._page("/work-orders/my", model=WorkOrder, operation="my", page=page, limit=limit)

    async def get(self, work_order_id: int) -> WorkOrder:
        data = await self._request("GET", f"/work-orders/{work_order_id}", operation="get")
        return self._parse(WorkOrder, data)

    async def create(self, payload: Mapping[str, Any]) -> WorkOrder:
        data = await self._request("POST", "/work-orders", json_body=payload, operation="create")
        return self._parse(WorkOrder, data)

    async def start(self, work_order_id: int) -> None:
        await self._request("PUT", f"/work-orders/{work_order_id}/start", allow_empty=True, operation="start")

    async def complete(self, work_order_id: int) -> None:
        await self._request(
            "PUT", f"/work-orders/{work_order_id}/complete", allow_empty=True, operation="complete"
        )

    async def assign(self, work_order_id: int, mechanic_id: int) -> None:
        await self._request(
            "PUT",
            f"/work-orders/{work_order_id}/assign",
            json_body={"mechanic_id": mechanic_id},
            allow_empty=True,
            operation="assign",
        )

    async def update_progress(self, work_order_id: int, progress: int) -> None:
        if not 0 <= progress <= 100:
            raise ValueError(f"progress must be between 0 and 100, got {progress}")
        await self._request(
            "PUT",
            f"/work-orders/{work_order_id}/progress",
            json_body={"progress": progress},
            allow_empty=True,
            operation="update_progress",
        )

    async def use_part(self, work_order_id: int, spare_part_id: int, quantity: int = 1) -> None:
        """Take ``quantity`` units of a spare part out of stock for this work order."""
        if quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {quantity}")
        await self._request(
            "POST",
            f"/work-orders/{work_order_id}/parts",
            json_body={"spare_part_id": spare_part_id, "quantity": quantity},
            allow_empty=True,
            operation="use_part",
        )

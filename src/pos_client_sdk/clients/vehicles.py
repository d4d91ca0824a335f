from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated
from ..models_showroom import Vehicle, VehicleStatus
from .base import DEFAULT_PAGE_SIZE, BaseClient


class VehiclesClient(BaseClient):
    module = "vehicles"

    async def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        status: VehicleStatus | str | None = None,
        search: str | None = None,
    ) -> Paginated[Vehicle]:
        return await self._page(
            "/vehicles",
            model=Vehicle,
            operation="list",
            page=page,
            limit=limit,
            filters={"status": VehicleStatus(status).value if status else None, "search": search or None},
        )

    async def get(self, vehicle_id: int) -> Vehicle:
        data = await self._request("GET", f"/vehicles/{vehicle_id}", operation="get")
        return self._parse(Vehicle, data)

    async def create(self, payload: Mapping[str, Any]) -> Vehicle:
        data = await self._request("POST", "/vehicles", json_body=payload, operation="create")
        return self._parse(Vehicle, data)

    async def update(self, vehicle_id: int, payload: Mapping[str, Any]) -> Vehicle:
        data = await self._request("PUT", f"/vehicles/{vehicle_id}", json_body=payload, operation="update")
        return self._parse(Vehicle, data)

    async def update_status(self, vehicle_id: int, status: VehicleStatus | str) -> None:
        await self._request(
            "PUT",
            f"/vehicles/{vehicle_id}/status",
            json_body={"status": VehicleStatus(status).value},
            allow_empty=True,
            operation="update_status",
        )

    async def delete(self, vehicle_id: int) -> None:
        await self._request("DELETE", f"/vehicles/{vehicle_id}", allow_empty=True, operation="delete")

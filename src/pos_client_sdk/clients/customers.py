from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated
from ..models_showroom import Customer
from .base import DEFAULT_PAGE_SIZE, BaseClient


class CustomersClient(BaseClient):
    module = "customers"

    async def list(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, search: str | None = None
    ) -> Paginated[Customer]:
        return await self._page(
            "/customers",
            model=Customer,
            operation="list",
            page=page,
            limit=limit,
            filters={"search": search or None},
        )

    async def get(self, customer_id: int) -> Customer:
        data = await self._request("GET", f"/customers/{customer_id}", operation="get")
        return self._parse(Customer, data)

    async def create(self, payload: Mapping[str, Any]) -> Customer:
        data = await self._request("POST", "/customers", json_body=payload, operation="create")
        return self._parse(Customer, data)

    async def update(self, customer_id: int, payload: Mapping[str, Any]) -> Customer:
        data = await self._request("PUT", f"/customers/{customer_id}", json_body=payload, operation="update")
        return self._parse(Customer, data)

    async def delete(self, customer_id: int) -> None:
        await self._request("DELETE", f"/customers/{customer_id}", allow_empty=True, operation="delete")

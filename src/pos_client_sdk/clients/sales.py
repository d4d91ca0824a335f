from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated
from ..models_showroom import SalesInvoice
from .base import DEFAULT_PAGE_SIZE, BaseClient


class SalesClient(BaseClient):
    module = "sales"

    async def list(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, customer_id: int | None = None
    ) -> Paginated[SalesInvoice]:
        return await self._page(
            "/sales",
            model=SalesInvoice,
            operation="list",
            page=page,
            limit=limit,
            filters={"customer_id": customer_id},
        )

    async def get(self, invoice_id: int) -> SalesInvoice:
        data = await self._request("GET", f"/sales/{invoice_id}", operation="get")
        return self._parse(SalesInvoice, data)

    async def create(self, payload: Mapping[str, Any]) -> SalesInvoice:
        data = await self._request("POST", "/sales", json_body=payload, operation="create")
        return self._parse(SalesInvoice, data)

    async def update(self, invoice_id: int, payload: Mapping[str, Any]) -> SalesInvoice:
        data = await self._request("PUT", f"/sales/{invoice_id}", json_body=payload, operation="update")
        return self._parse(SalesInvoice, data)

    async def delete(self, invoice_id: int) -> None:
        await self._request("DELETE", f"/sales/{invoice_id}", allow_empty=True, operation="delete")

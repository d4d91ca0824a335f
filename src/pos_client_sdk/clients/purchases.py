from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated
from ..models_showroom import PurchaseInvoice
from .base import DEFAULT_PAGE_SIZE, BaseClient


class PurchasesClient(BaseClient):
    module = "purchases"

    async def list(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Paginated[PurchaseInvoice]:
        return await self._page("/purchases", model=PurchaseInvoice, operation="list", page=page, limit=limit)

    async def get(self, invoice_id: int) -> PurchaseInvoice:
        data = await self._request("GET", f"/purchases/{invoice_id}", operation="get")
        return self._parse(PurchaseInvoice, data)

    async def create(self, payload: Mapping[str, Any]) -> PurchaseInvoice:
        data = await self._request("POST", "/purchases", json_body=payload, operation="create")
        return self._parse(PurchaseInvoice, data)

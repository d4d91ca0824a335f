from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated
from ..models_workshop import SparePart
from .base import DEFAULT_PAGE_SIZE, BaseClient


class SparePartsClient(BaseClient):
    module = "spare_parts"

    async def list(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, search: str | None = None
    ) -> Paginated[SparePart]:
        return await self._page(
            "/spare-parts",
            model=SparePart,
            operation="list",
            page=page,
            limit=limit,
            filters={"search": search or None},
        )

    async def create(self, payload: Mapping[str, Any]) -> SparePart:
        data = await self._request("POST", "/spare-parts", json_body=payload, operation="create")
        return self._parse(SparePart, data)

    async def low_stock(self) -> list[SparePart]:
        data = await self._request("GET", "/spare-parts/low-stock", allow_empty=True, operation="low_stock")
        return self._parse_list(SparePart, data)

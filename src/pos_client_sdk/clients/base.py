from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, TypeVar

from pydantic import BaseModel

from ..envelope import decode
from ..http_client import HttpClient
from ..models import Paginated

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_PAGE_SIZE = 20


def _check_paging(page: int, limit: int) -> None:
    if page < 1:
        raise ValueError(f"page is 1-based, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")


@dataclass
class BaseClient:
    http: HttpClient
    module: ClassVar[str] = "unknown"

    async def _request(self, method: str, path: str, *, operation: str, **kwargs: Any) -> Any:
        return await self.http.request(method, path, module=self.module, operation=operation, **kwargs)

    async def _page(
        self,
        path: str,
        *,
        model: type[ModelT],
        operation: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        filters: Mapping[str, Any] | None = None,
        rows_key: str = "data",
    ) -> Paginated[ModelT]:
        _check_paging(page, limit)
        params = {"page": page, "limit": limit, **(filters or {})}
        return await self.http.request_page(
            path,
            model=model,
            params=params,
            rows_key=rows_key,
            module=self.module,
            operation=operation,
        )

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        return decode(model, data)

    @staticmethod
    def _parse_list(model: type[ModelT], data: Any) -> list[ModelT]:
        return [decode(model, item) for item in (data or [])]

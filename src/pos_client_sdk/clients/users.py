from __future__ import annotations

from typing import Any, Mapping

from ..models import Paginated, Role
from ..models_showroom import ManagedUser
from .base import DEFAULT_PAGE_SIZE, BaseClient


class UsersClient(BaseClient):
    """Admin-only user management."""

    module = "admin_users"

    async def list(
        self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, role: Role | str | None = None
    ) -> Paginated[ManagedUser]:
        return await self._page(
            "/admin/users",
            model=ManagedUser,
            operation="list",
            page=page,
            limit=limit,
            filters={"role": Role.parse(role).value if role else None},
        )

    async def get(self, user_id: int) -> ManagedUser:
        data = await self._request("GET", f"/admin/users/{user_id}", operation="get")
        return self._parse(ManagedUser, data)

    async def create(self, payload: Mapping[str, Any]) -> ManagedUser:
        data = await self._request("POST", "/admin/users", json_body=payload, operation="create")
        return self._parse(ManagedUser, data)

    async def update(self, user_id: int, payload: Mapping[str, Any]) -> ManagedUser:
        data = await self._request("PUT", f"/admin/users/{user_id}", json_body=payload, operation="update")
        return self._parse(ManagedUser, data)

    async def delete(self, user_id: int) -> None:
        await self._request("DELETE", f"/admin/users/{user_id}", allow_empty=True, operation="delete")

    async def activate(self, user_id: int, is_active: bool = True) -> None:
        await self._request(
            "PUT",
            f"/admin/users/{user_id}/activate",
            json_body={"is_active": is_active},
            allow_empty=True,
            operation="activate",
        )

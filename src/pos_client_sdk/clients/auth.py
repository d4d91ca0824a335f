from __future__ import annotations

from ..models import ChangePasswordRequest, LoginRequest, LoginResult, TokenRefresh, UserIdentity
from .base import BaseClient


class AuthClient(BaseClient):
    module = "auth"

    async def login(self, username: str, password: str) -> LoginResult:
        payload = LoginRequest(username=username, password=password).model_dump()
        data = await self._request("POST", "/auth/login", json_body=payload, operation="login")
        return self._parse(LoginResult, data)

    async def profile(self) -> UserIdentity:
        data = await self._request("GET", "/auth/profile", operation="profile")
        return self._parse(UserIdentity, data)

    async def change_password(self, old_password: str, new_password: str) -> None:
        payload = ChangePasswordRequest(old_password=old_password, new_password=new_password).model_dump()
        await self._request(
            "POST",
            "/auth/change-password",
            json_body=payload,
            allow_empty=True,
            operation="change_password",
        )

    async def refresh_token(self) -> str:
        data = await self._request("POST", "/auth/refresh", operation="refresh")
        return self._parse(TokenRefresh, data).token

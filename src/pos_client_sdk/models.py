from __future__ import annotations

import math
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class WireModel(BaseModel):
    """camelCase on the wire; snake_case field names are accepted as well."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Role(str, Enum):
    ADMIN = "admin"
    KASIR = "kasir"
    MEKANIK = "mekanik"

    @property
    def dashboard_segment(self) -> str:
        if self is Role.MEKANIK:
            return "mechanic"
        return self.value

    @classmethod
    def parse(cls, value: "Role | str") -> "Role":
        if isinstance(value, Role):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown role: {value!r}") from None


class UserIdentity(WireModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    id: int
    username: str
    role: Role
    display_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("displayName", "display_name", "name", "fullName", "full_name"),
    )
    email: Optional[str] = None
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: Any) -> Role:
        return Role.parse(value)


class LoginRequest(WireModel):
    username: str
    password: str


class TokenRefresh(WireModel):
    token: str

    @field_validator("token")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("token must not be blank")
        return value


class LoginResult(TokenRefresh):
    user: UserIdentity


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str


class Pagination(WireModel):
    page: int = 1
    limit: int = 0
    total: int = 0
    total_pages: int = 0
    has_next: Optional[bool] = None
    has_prev: Optional[bool] = None

    @model_validator(mode="after")
    def _derive_flags(self) -> "Pagination":
        if not self.total_pages and self.limit > 0 and self.total > 0:
            self.total_pages = math.ceil(self.total / self.limit)
        if self.has_next is None:
            self.has_next = self.page < self.total_pages
        if self.has_prev is None:
            self.has_prev = self.page > 1
        return self


class Paginated(WireModel, Generic[T]):
    data: List[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)

    @field_validator("data", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def total_pages(self) -> int:
        return self.pagination.total_pages

    def __len__(self) -> int:
        return len(self.data)


class UploadResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    file_path: Optional[str] = Field(default=None, validation_alias=AliasChoices("file_path", "filePath"))
    file_url: str = Field(validation_alias=AliasChoices("file_url", "fileUrl", "url"))
    message: Optional[str] = None

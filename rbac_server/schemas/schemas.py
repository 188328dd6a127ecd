"""Pydantic schemas for API request/response serialization."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RequestBody(BaseModel):
    """camelCase JSON bodies; unknown keys such as ``id`` are dropped."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually set, minus explicit nulls."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


def _permission_ids(value: Any) -> Any:
    if isinstance(value, list):
        return [item.get("id") if isinstance(item, dict) else item for item in value]
    return value


# ---- Auth ----
class LoginRequest(RequestBody):
    # Blank or missing credentials fall through to the 401 from authenticate.
    username: str = ""
    password: str = ""

class LoginResponse(BaseModel):
    success: bool = True
    token: str
    user: Dict[str, Any]

class RefreshResponse(BaseModel):
    success: bool = True
    token: str


# ---- User ----
class UserCreateRequest(RequestBody):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    full_name: Optional[str] = None
    email: Optional[str] = None
    role_id: Optional[int] = None
    is_super_admin: bool = False

class UserUpdateRequest(RequestBody):
    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=1)
    role_id: Optional[int] = None
    is_active: Optional[bool] = None
    is_super_admin: Optional[bool] = None

class UsernameAvailability(BaseModel):
    available: bool
    username: str


# ---- Role ----
class RoleCreateRequest(RequestBody):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: int = Field(..., ge=1)
    permissions: List[int] = Field(default_factory=list)

    @field_validator("permissions", mode="before")
    @classmethod
    def normalize_permissions(cls, value: Any) -> Any:
        return _permission_ids(value)

class RoleUpdateRequest(RequestBody):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1)
    permissions: Optional[List[int]] = None

    @field_validator("permissions", mode="before")
    @classmethod
    def normalize_permissions(cls, value: Any) -> Any:
        return _permission_ids(value)


# ---- Generic ----
class MessageResponse(BaseModel):
    message: str

class SuccessResponse(BaseModel):
    success: bool = True
    message: str

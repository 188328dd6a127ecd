"""User model."""

from typing import Any, Optional

from pydantic import field_validator

from rbac_server.db.base import Base


class User(Base):
    """Account with a single role and an independent super-admin override."""

    id: int
    username: str
    password: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    role_id: Optional[int] = None
    is_active: bool = True
    is_super_admin: bool = False
    created_by: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("created_by", mode="before")
    @classmethod
    def normalize_created_by(cls, value: Any) -> Any:
        # Older documents embed the whole creating user.
        if isinstance(value, dict):
            return value.get("id")
        return value

"""Role model for RBAC."""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from rbac_server.db.base import Base
from rbac_server.models.priority import Priority


class Role(Base):
    """Role with a hierarchical priority and a set of permission ids."""

    id: int
    name: str
    description: Optional[str] = None
    priority: int = Field(..., ge=1)
    permissions: List[int] = Field(default_factory=list)
    is_system: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("permissions", mode="before")
    @classmethod
    def normalize_permissions(cls, value: Any) -> Any:
        # Older documents embed whole permission objects instead of ids.
        if isinstance(value, list):
            return [item.get("id") if isinstance(item, dict) else item for item in value]
        return value

    @property
    def rank(self) -> Priority:
        return Priority(self.priority)

"""Permission model."""

from typing import Optional

from rbac_server.db.base import Base


class Permission(Base):
    """Named capability such as ``VIEW_USERS``; reference data, never mutated."""

    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None

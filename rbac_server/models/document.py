"""The whole persisted document: users, roles and permissions."""

from typing import List, Optional

from pydantic import Field

from rbac_server.db.base import Base
from rbac_server.models.permission import Permission
from rbac_server.models.role import Role
from rbac_server.models.user import User


class Document(Base):
    """Users, roles and permissions, always read and written as one unit."""

    users: List[User] = Field(default_factory=list)
    roles: List[Role] = Field(default_factory=list)
    permissions: List[Permission] = Field(default_factory=list)

    def find_user(self, user_id: int) -> Optional[User]:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users if u.username == username), None)

    def find_role(self, role_id: Optional[int]) -> Optional[Role]:
        if role_id is None:
            return None
        return next((r for r in self.roles if r.id == role_id), None)

    def find_role_by_name(self, name: str) -> Optional[Role]:
        lowered = name.lower()
        return next((r for r in self.roles if r.name.lower() == lowered), None)

    def role_permissions(self, role: Role) -> List[Permission]:
        """Global permissions granted by ``role``, in document order."""
        granted = set(role.permissions)
        return [p for p in self.permissions if p.id in granted]

    def users_with_role(self, role_id: int) -> List[User]:
        return [u for u in self.users if u.role_id == role_id]

    def next_user_id(self) -> int:
        return max((u.id for u in self.users), default=0) + 1

    def next_role_id(self) -> int:
        return max((r.id for r in self.roles), default=0) + 1

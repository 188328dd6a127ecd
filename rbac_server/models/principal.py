"""Authenticated actor for the lifetime of one request."""

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from rbac_server.models.permission import Permission
from rbac_server.models.priority import Priority
from rbac_server.models.role import Role
from rbac_server.models.user import User


@dataclass(frozen=True)
class Principal:
    """A user joined with its role and the role's resolved permissions."""

    user: User
    role: Role
    permissions: Tuple[Permission, ...] = ()

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def is_super_admin(self) -> bool:
        return self.user.is_super_admin

    @property
    def priority(self) -> Priority:
        return self.role.rank

    @property
    def role_name(self) -> str:
        return self.role.name

    @property
    def permission_names(self) -> FrozenSet[str]:
        return frozenset(p.name.lower() for p in self.permissions)

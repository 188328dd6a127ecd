"""Models package — entities of the stored document plus request-scoped values."""

from rbac_server.models.permission import Permission
from rbac_server.models.role import Role
from rbac_server.models.user import User
from rbac_server.models.document import Document
from rbac_server.models.priority import Priority, TOP_PRIORITY
from rbac_server.models.principal import Principal

__all__ = [
    "Permission", "Role", "User", "Document",
    "Priority", "TOP_PRIORITY", "Principal",
]

"""Mutation rules — invariants checked before any user or role is written.

Each ``check_*`` function receives the acting principal, the document
being mutated and the requested change. It raises on the first violated
rule and returns normally otherwise; nothing here writes.
"""

from typing import Any, Dict, Iterable, Optional

from rbac_server.core.config import settings
from rbac_server.core.exceptions import (
    AuthorizationError,
    ResourceConflictError,
    ResourceNotFoundError,
    RuleViolationError,
)
from rbac_server.core.hierarchy import can_access_role, can_access_user
from rbac_server.models.document import Document
from rbac_server.models.principal import Principal
from rbac_server.models.priority import Priority
from rbac_server.models.role import Role
from rbac_server.models.user import User


def _require_role(document: Document, role_id: int) -> Role:
    role = document.find_role(role_id)
    if role is None:
        raise ResourceNotFoundError(f"Role {role_id} not found")
    return role


def _require_permissions(document: Document, permission_ids: Iterable[int]) -> None:
    known = {p.id for p in document.permissions}
    missing = [str(pid) for pid in permission_ids if pid not in known]
    if missing:
        raise ResourceNotFoundError(f"Permission(s) not found: {', '.join(missing)}")


def _require_unique_role_name(document: Document, name: str, role_id: Optional[int] = None) -> None:
    existing = document.find_role_by_name(name)
    if existing is not None and existing.id != role_id:
        raise ResourceConflictError(f"Role name '{name}' is already in use.")


# ---- Users ----

def check_user_create(
    actor: Principal,
    document: Document,
    username: str,
    role_id: Optional[int] = None,
    is_super_admin: bool = False,
) -> None:
    if is_super_admin and not actor.is_super_admin:
        raise AuthorizationError("Only super admins can create super admin users")

    if role_id is not None:
        role = _require_role(document, role_id)
        if not actor.is_super_admin and actor.priority.is_weaker_than(role.rank):
            raise AuthorizationError(
                f"You cannot create users with {role.name} role. "
                "You can only create users with roles at your level or below."
            )

    if document.find_user_by_username(username) is not None:
        raise ResourceConflictError(f"Username '{username}' is already in use.")


def check_user_update(
    actor: Principal,
    document: Document,
    target: User,
    changes: Dict[str, Any],
) -> None:
    """``changes`` holds the snake_case fields the request actually sets."""
    if (
        "is_super_admin" in changes
        and changes["is_super_admin"] != target.is_super_admin
        and not actor.is_super_admin
    ):
        raise AuthorizationError("Only super admins can modify super admin status")

    new_role_id = changes.get("role_id")
    if new_role_id is None or new_role_id == target.role_id:
        return

    new_role = _require_role(document, new_role_id)
    current_role = document.find_role(target.role_id)

    if not actor.is_super_admin:
        if actor.priority.is_weaker_than(new_role.rank):
            raise AuthorizationError(
                f"You cannot assign {new_role.name} role. "
                "You can only assign roles at your level or below."
            )
        if current_role is not None and actor.priority.is_weaker_than(current_role.rank):
            raise AuthorizationError(
                f"You cannot modify users with {current_role.name} role."
            )

    if target.id == actor.id and new_role.rank.is_stronger_than(actor.priority):
        raise AuthorizationError("You cannot elevate your own role")


def check_user_delete(actor: Principal, document: Document, target: User) -> None:
    if target.is_super_admin:
        raise RuleViolationError("Cannot delete super admin user")

    if target.id == actor.id:
        raise RuleViolationError("You cannot delete your own account")

    if not can_access_user(actor, target, document.find_role(target.role_id)):
        raise AuthorizationError("You can only delete users within your role hierarchy")


# ---- Roles ----

def check_role_create(
    actor: Principal,
    document: Document,
    name: str,
    priority: int,
    permission_ids: Iterable[int] = (),
) -> None:
    requested = Priority(priority)
    if requested.is_top and not actor.is_super_admin:
        raise AuthorizationError(
            "Only super admins can create roles with priority 1 (which is itself)"
        )

    if not actor.is_super_admin and requested.is_stronger_than(actor.priority):
        raise AuthorizationError(
            "You can only create roles at your level or below in the hierarchy"
        )

    _require_unique_role_name(document, name)
    _require_permissions(document, permission_ids)


def check_role_update(
    actor: Principal,
    document: Document,
    target: Role,
    changes: Dict[str, Any],
) -> None:
    """``changes`` holds the snake_case fields the request actually sets."""
    priority = changes.get("priority")
    requested = Priority(priority) if priority is not None else None

    if target.is_system and requested is not None and requested.is_top and not actor.is_super_admin:
        raise AuthorizationError("Only super admins can modify super admin roles")

    if not can_access_role(actor, target):
        raise AuthorizationError(
            "You can only modify roles within your role hierarchy. "
            f"Your role: {actor.role_name}"
        )

    if requested is not None:
        if target.id == actor.role.id and requested.is_stronger_than(actor.priority):
            raise AuthorizationError("You cannot elevate your own role")
        if not actor.is_super_admin and requested.is_stronger_than(actor.priority):
            raise AuthorizationError(
                "You can only move roles to your level or below in the hierarchy"
            )

    if changes.get("name") is not None:
        _require_unique_role_name(document, changes["name"], role_id=target.id)

    if changes.get("permissions") is not None:
        _require_permissions(document, changes["permissions"])


def check_role_delete(actor: Principal, document: Document, target: Role) -> None:
    if target.name.lower() == settings.SUPER_ADMIN_ROLE_NAME.lower():
        raise RuleViolationError(f"Cannot delete {target.name} role")

    assigned = len(document.users_with_role(target.id))
    if assigned > 0:
        raise ResourceConflictError(
            "Cannot delete role. Users are assigned to this role.",
            extra={"userCount": assigned},
        )

    if target.is_system:
        raise RuleViolationError("Cannot delete system role")

    if not can_access_role(actor, target):
        raise AuthorizationError("You can only delete roles within your role hierarchy")

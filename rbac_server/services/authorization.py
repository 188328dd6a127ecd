"""Authorization gate — role, permission and resource-hierarchy checks.

Each check either returns quietly (or with the resolved target) or raises
one of the taxonomy errors. They only read the document they are given.
"""

import logging
from typing import Iterable, List

from rbac_server.core.exceptions import AuthorizationError, ResourceNotFoundError
from rbac_server.core.hierarchy import can_access_role, can_access_user
from rbac_server.models.document import Document
from rbac_server.models.principal import Principal
from rbac_server.models.role import Role
from rbac_server.models.user import User

logger = logging.getLogger("rbac_server")


def check_role_membership(principal: Principal, allowed_roles: Iterable[str]) -> None:
    """Require the principal's role name to be one of ``allowed_roles`` (case-insensitive)."""
    allowed = list(allowed_roles)
    if principal.is_super_admin:
        return
    if principal.role_name.lower() in {name.lower() for name in allowed}:
        return
    logger.warning(
        "User %s with role %r denied; requires one of %s",
        principal.id, principal.role_name, allowed,
    )
    raise AuthorizationError(
        f"Access denied. Required role(s): {', '.join(allowed)}. "
        f"Your role: {principal.role_name}"
    )


def check_permission_membership(principal: Principal, allowed_permissions: Iterable[str]) -> None:
    """Require at least one of ``allowed_permissions`` (case-insensitive)."""
    allowed = list(allowed_permissions)
    if principal.is_super_admin:
        return
    held = principal.permission_names
    if any(name.lower() in held for name in allowed):
        return
    logger.warning("User %s denied; requires permission in %s", principal.id, allowed)
    raise AuthorizationError(
        f"Access denied. Required permission(s): {', '.join(allowed)}"
    )


def check_user_access(principal: Principal, document: Document, target_user_id: int) -> User:
    """Resolve ``target_user_id`` and require hierarchy reach or self-access.

    Raises:
        ResourceNotFoundError: If the user does not exist.
        AuthorizationError: If the target is out of reach and not the principal.
    """
    target = document.find_user(target_user_id)
    if target is None:
        raise ResourceNotFoundError("User not found")

    target_role = document.find_role(target.role_id)
    if can_access_user(principal, target, target_role) or target.id == principal.id:
        return target

    logger.warning("User %s denied access to user %s", principal.id, target.id)
    raise AuthorizationError(
        "Access denied. You can only access users within your role hierarchy "
        "or your own resources."
    )


def check_role_access(principal: Principal, document: Document, role_id: int) -> Role:
    """Resolve ``role_id`` and require the principal to reach it."""
    role = document.find_role(role_id)
    if role is None:
        raise ResourceNotFoundError("Role not found")
    if not can_access_role(principal, role):
        raise AuthorizationError(
            "You can only view roles within your role hierarchy. "
            f"Your role: {principal.role_name}"
        )
    return role


def visible_roles(principal: Principal, document: Document) -> List[Role]:
    """Roles at the principal's level or below."""
    return [r for r in document.roles if can_access_role(principal, r)]


def visible_users(principal: Principal, document: Document) -> List[User]:
    """All users for super admins, otherwise the users the principal created."""
    if principal.is_super_admin:
        return list(document.users)
    return [u for u in document.users if u.created_by == principal.id]

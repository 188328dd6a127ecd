"""Priority-based reachability between principals, users and roles.

These functions are pure: callers resolve every user and role beforehand
and pass them in. Equal priority is reachable, so peers may act on peers.
"""

from typing import Optional

from rbac_server.models.principal import Principal
from rbac_server.models.role import Role
from rbac_server.models.user import User


def can_access_role(actor: Principal, target_role: Optional[Role]) -> bool:
    """Whether ``actor`` may view or manage ``target_role``."""
    if actor.is_super_admin:
        return True
    if target_role is None:
        return False
    return actor.priority.is_at_least_as_strong_as(target_role.rank)


def can_access_user(actor: Principal, target_user: User, target_role: Optional[Role]) -> bool:
    """Whether ``actor`` may view or manage ``target_user`` holding ``target_role``.

    Super admins reach everyone; nobody else reaches a super admin.
    """
    if actor.is_super_admin:
        return True
    if target_user.is_super_admin:
        return False
    return can_access_role(actor, target_role)

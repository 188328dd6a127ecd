"""Canonical response shapes for users and roles.

Every endpoint that returns a user or a role goes through these two
functions so list, detail, create and update responses never drift apart.
"""

from typing import Any, Dict, Optional

from rbac_server.models.document import Document
from rbac_server.models.role import Role
from rbac_server.models.user import User


def enrich_role(document: Document, role: Optional[Role]) -> Optional[Dict[str, Any]]:
    """Role fields plus ``userCount``, ``permissionCount`` and ``permissionDetails``."""
    if role is None:
        return None
    permissions = document.role_permissions(role)
    return {
        **role.to_json(),
        "userCount": len(document.users_with_role(role.id)),
        "permissionCount": len(permissions),
        "permissionDetails": [p.to_json() for p in permissions],
    }


def enrich_user(document: Document, user: User) -> Dict[str, Any]:
    """User fields without the credential, plus the resolved ``role`` and ``permissions``."""
    role = document.find_role(user.role_id)
    payload = user.to_json()
    payload.pop("password", None)
    payload["role"] = enrich_role(document, role)
    payload["permissions"] = (
        [p.to_json() for p in document.role_permissions(role)] if role else []
    )
    return payload

"""Auth service — login and principal resolution."""

import logging
from typing import Any, Dict, Optional

from rbac_server.core.exceptions import AuthenticationError, InternalInconsistencyError
from rbac_server.models.document import Document
from rbac_server.models.principal import Principal
from rbac_server.models.user import User
from rbac_server.services.projection import enrich_role

logger = logging.getLogger("rbac_server")


class AuthService:
    """Handles credential checks and turns identities into principals."""

    @staticmethod
    def build_principal(document: Document, user: User) -> Principal:
        """Join ``user`` with its role and the role's permissions.

        Raises:
            InternalInconsistencyError: If the user's role no longer exists.
        """
        role = document.find_role(user.role_id)
        if role is None:
            logger.error(
                "User %s references missing role %s", user.id, user.role_id,
            )
            raise InternalInconsistencyError(
                f"Role {user.role_id} assigned to user {user.id} cannot be resolved"
            )
        return Principal(
            user=user,
            role=role,
            permissions=tuple(document.role_permissions(role)),
        )

    @staticmethod
    def resolve_principal(document: Document, claimed_user_id: Optional[str]) -> Principal:
        """Resolve the identity claimed by the ``x-user-id`` header.

        The bearer token has already been checked for shape by the caller.

        Raises:
            AuthenticationError: If the claim is missing, unknown or inactive.
        """
        if not claimed_user_id or not claimed_user_id.strip().isdigit():
            raise AuthenticationError("Invalid token or user not found")

        user = document.find_user(int(claimed_user_id))
        if user is None or not user.is_active:
            raise AuthenticationError("Invalid token or user not found")

        return AuthService.build_principal(document, user)

    @staticmethod
    def authenticate(document: Document, username: str, password: str) -> Principal:
        """Check credentials against active users.

        Raises:
            AuthenticationError: If credentials are invalid or the account is inactive.
        """
        user = document.find_user_by_username(username)
        if user is None or not password or user.password != password or not user.is_active:
            logger.warning("Failed login for username %r", username)
            raise AuthenticationError("Invalid username or password")
        return AuthService.build_principal(document, user)

    @staticmethod
    def session_user(document: Document, principal: Principal) -> Dict[str, Any]:
        """User block returned by login."""
        user = principal.user
        return {
            "id": user.id,
            "username": user.username,
            "fullName": user.full_name,
            "email": user.email,
            "isSuperAdmin": user.is_super_admin,
            "role": enrich_role(document, principal.role),
            "permissions": [p.to_json() for p in principal.permissions],
        }


auth_service = AuthService()

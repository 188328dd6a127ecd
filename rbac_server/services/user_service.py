"""User service — hierarchy-aware user management."""

import logging
from typing import Any, Dict, List

from rbac_server.core.exceptions import ResourceNotFoundError
from rbac_server.db.base import utc_timestamp
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.document import Document
from rbac_server.models.principal import Principal
from rbac_server.models.user import User
from rbac_server.schemas.schemas import UserCreateRequest
from rbac_server.services import rules
from rbac_server.services.authorization import check_user_access, visible_users
from rbac_server.services.projection import enrich_user

logger = logging.getLogger("rbac_server")


class UserService:
    """Reads and mutates users on behalf of an authenticated principal."""

    @staticmethod
    def list_users(document: Document, actor: Principal) -> List[Dict[str, Any]]:
        """Users visible to ``actor``, each with its resolved role."""
        return [enrich_user(document, u) for u in visible_users(actor, document)]

    @staticmethod
    def get_user(document: Document, user_id: int) -> Dict[str, Any]:
        user = document.find_user(user_id)
        if user is None:
            raise ResourceNotFoundError("User not found")
        return enrich_user(document, user)

    @staticmethod
    def username_available(document: Document, username: str) -> bool:
        return document.find_user_by_username(username) is None

    @staticmethod
    def create_user(store: JsonDocumentStore, actor: Principal, body: UserCreateRequest) -> Dict[str, Any]:
        """Create a user after the creation rules pass.

        Raises:
            AuthorizationError: If the actor may not grant the flag or role.
            ResourceNotFoundError: If the requested role does not exist.
            ResourceConflictError: If the username is taken.
        """
        with store.transaction() as document:
            rules.check_user_create(
                actor, document, body.username, body.role_id, body.is_super_admin,
            )
            user = User(
                id=document.next_user_id(),
                username=body.username,
                password=body.password,
                full_name=body.full_name,
                email=body.email,
                role_id=body.role_id,
                is_active=True,
                is_super_admin=body.is_super_admin,
                created_by=actor.id,
                created_at=utc_timestamp(),
            )
            document.users.append(user)

        logger.info("User %s (%s) created by %s", user.id, user.username, actor.id)
        return enrich_user(document, user)

    @staticmethod
    def update_user(
        store: JsonDocumentStore,
        actor: Principal,
        user_id: int,
        changes: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Apply ``changes`` to a user. Username and id never change here."""
        changes = {k: v for k, v in changes.items() if k not in ("id", "username")}

        with store.transaction() as document:
            user = check_user_access(actor, document, user_id)
            rules.check_user_update(actor, document, user, changes)
            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = utc_timestamp()

        logger.info("User %s updated by %s: %s", user.id, actor.id, sorted(changes))
        return enrich_user(document, user)

    @staticmethod
    def delete_user(store: JsonDocumentStore, actor: Principal, user_id: int) -> None:
        with store.transaction() as document:
            user = document.find_user(user_id)
            if user is None:
                raise ResourceNotFoundError("User not found")
            rules.check_user_delete(actor, document, user)
            document.users.remove(user)

        logger.info("User %s (%s) deleted by %s", user.id, user.username, actor.id)


user_service = UserService()

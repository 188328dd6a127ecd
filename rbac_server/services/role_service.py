"""Role service — hierarchy-aware role management."""

import logging
from typing import Any, Dict, List

from rbac_server.core.exceptions import ResourceNotFoundError
from rbac_server.db.base import utc_timestamp
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.document import Document
from rbac_server.models.principal import Principal
from rbac_server.models.role import Role
from rbac_server.schemas.schemas import RoleCreateRequest
from rbac_server.services import rules
from rbac_server.services.authorization import check_role_access, visible_roles
from rbac_server.services.projection import enrich_role

logger = logging.getLogger("rbac_server")


class RoleService:
    """Reads and mutates roles on behalf of an authenticated principal."""

    @staticmethod
    def list_roles(document: Document, actor: Principal) -> List[Dict[str, Any]]:
        """Roles at the actor's level or below, with counts and permission details."""
        return [enrich_role(document, r) for r in visible_roles(actor, document)]

    @staticmethod
    def get_role(document: Document, actor: Principal, role_id: int) -> Dict[str, Any]:
        return enrich_role(document, check_role_access(actor, document, role_id))

    @staticmethod
    def create_role(store: JsonDocumentStore, actor: Principal, body: RoleCreateRequest) -> Dict[str, Any]:
        with store.transaction() as document:
            rules.check_role_create(
                actor, document, body.name, body.priority, body.permissions,
            )
            role = Role(
                id=document.next_role_id(),
                name=body.name,
                description=body.description,
                priority=body.priority,
                permissions=list(body.permissions),
                is_system=False,
                created_at=utc_timestamp(),
            )
            document.roles.append(role)

        logger.info("Role %s (%s) created by %s", role.id, role.name, actor.id)
        return enrich_role(document, role)

    @staticmethod
    def update_role(
        store: JsonDocumentStore,
        actor: Principal,
        role_id: int,
        changes: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Apply ``changes`` to a role. The id and system flag never change here."""
        changes = {k: v for k, v in changes.items() if k not in ("id", "is_system")}

        with store.transaction() as document:
            role = document.find_role(role_id)
            if role is None:
                raise ResourceNotFoundError("Role not found")
            rules.check_role_update(actor, document, role, changes)
            for field, value in changes.items():
                setattr(role, field, value)
            role.updated_at = utc_timestamp()

        logger.info("Role %s updated by %s: %s", role.id, actor.id, sorted(changes))
        return enrich_role(document, role)

    @staticmethod
    def delete_role(store: JsonDocumentStore, actor: Principal, role_id: int) -> None:
        with store.transaction() as document:
            role = document.find_role(role_id)
            if role is None:
                raise ResourceNotFoundError("Role not found")
            rules.check_role_delete(actor, document, role)
            document.roles.remove(role)

        logger.info("Role %s (%s) deleted by %s", role.id, role.name, actor.id)


role_service = RoleService()

"""Roles API router — hierarchy-filtered reads, rule-checked writes."""

from fastapi import APIRouter, Depends

from rbac_server.core.security import require_management
from rbac_server.db.session import get_store
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.principal import Principal
from rbac_server.schemas.schemas import MessageResponse, RoleCreateRequest, RoleUpdateRequest
from rbac_server.services.role_service import role_service

router = APIRouter(prefix="/roles", tags=["roles"])
# Older clients list roles under /api.
legacy_router = APIRouter(prefix="/api", tags=["roles"])


@router.get("")
@legacy_router.get("/roles")
def list_roles(
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """List roles at the caller's level or below."""
    return role_service.list_roles(store.snapshot(), principal)


@router.get("/{role_id}")
def get_role(
    role_id: int,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Get one role with counts and permission details."""
    return role_service.get_role(store.snapshot(), principal, role_id)


@router.post("", status_code=201)
def create_role(
    body: RoleCreateRequest,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Create a role at or below the caller's level."""
    return role_service.create_role(store, principal, body)


@router.put("/{role_id}")
def update_role(
    role_id: int,
    body: RoleUpdateRequest,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Update a role within the caller's hierarchy."""
    return role_service.update_role(store, principal, role_id, body.changes())


@router.delete("/{role_id}", response_model=MessageResponse)
def delete_role(
    role_id: int,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Delete an unused, non-system role."""
    role_service.delete_role(store, principal, role_id)
    return MessageResponse(message="Role deleted successfully")

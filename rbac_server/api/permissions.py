"""Permissions and profile API router."""

from fastapi import APIRouter, Depends

from rbac_server.core.security import get_principal
from rbac_server.db.session import get_store
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.principal import Principal
from rbac_server.services.projection import enrich_user

router = APIRouter(tags=["permissions"])


@router.get("/permissions")
@router.get("/api/permissions")
def list_permissions(
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(get_principal),
):
    """All permissions; reference data for any authenticated user."""
    return [p.to_json() for p in store.snapshot().permissions]


@router.get("/profile")
def get_profile(
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(get_principal),
):
    """The caller's own user, role and permissions."""
    return {"user": enrich_user(store.snapshot(), principal.user)}

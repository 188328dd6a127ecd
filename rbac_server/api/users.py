"""Users API router — hierarchy-aware CRUD."""

from fastapi import APIRouter, Depends

from rbac_server.core.security import get_principal, require_management, require_user_access
from rbac_server.db.session import get_store
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.principal import Principal
from rbac_server.models.user import User
from rbac_server.schemas.schemas import (
    MessageResponse, UserCreateRequest, UserUpdateRequest, UsernameAvailability,
)
from rbac_server.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def list_users(
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """List users; non-super-admins see the users they created."""
    return user_service.list_users(store.snapshot(), principal)


@router.get("/check-username/{username}", response_model=UsernameAvailability)
def check_username(
    username: str,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Report whether a username is still free."""
    return UsernameAvailability(
        available=user_service.username_available(store.snapshot(), username),
        username=username,
    )


@router.get("/{user_id}")
def get_user(
    user_id: int,
    store: JsonDocumentStore = Depends(get_store),
    target: User = Depends(require_user_access),
):
    """Get a user with role and permissions."""
    return user_service.get_user(store.snapshot(), target.id)


@router.post("", status_code=201)
def create_user(
    body: UserCreateRequest,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Create a user at or below the caller's level."""
    return user_service.create_user(store, principal, body)


@router.put("/{user_id}")
def update_user(
    user_id: int,
    body: UserUpdateRequest,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(get_principal),
    target: User = Depends(require_user_access),
):
    """Update a user the caller can reach, or the caller themselves."""
    return user_service.update_user(store, principal, target.id, body.changes())


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    store: JsonDocumentStore = Depends(get_store),
    principal: Principal = Depends(require_management),
):
    """Delete a user within the caller's hierarchy."""
    user_service.delete_user(store, principal, user_id)
    return MessageResponse(message="User deleted successfully")

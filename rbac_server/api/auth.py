"""Auth API router — login, logout, refresh."""

from fastapi import APIRouter, Depends

from rbac_server.core.security import create_access_token, get_principal
from rbac_server.db.session import get_store
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.principal import Principal
from rbac_server.schemas.schemas import (
    LoginRequest, LoginResponse, RefreshResponse, SuccessResponse,
)
from rbac_server.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, store: JsonDocumentStore = Depends(get_store)):
    """Check credentials and return a token plus the session user."""
    document = store.snapshot()
    principal = auth_service.authenticate(document, body.username, body.password)
    return LoginResponse(
        token=create_access_token(principal.id),
        user=auth_service.session_user(document, principal),
    )


@router.post("/logout", response_model=SuccessResponse)
def logout(principal: Principal = Depends(get_principal)):
    """Tokens are stateless; the client discards its copy."""
    return SuccessResponse(message="Logged out successfully")


@router.post("/refresh", response_model=RefreshResponse)
def refresh(principal: Principal = Depends(get_principal)):
    """Issue a fresh token for the current principal."""
    return RefreshResponse(token=create_access_token(principal.id))

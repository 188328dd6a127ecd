"""Opaque bearer tokens and the FastAPI guards built on them.

Tokens have the shape ``<prefix>-<userId>-<epochMillis>``. They are not
signed: the acting identity comes from the ``x-user-id`` header, and the
token only has to be well formed (and, when enabled, unexpired and bound
to that same id).
"""

import re
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from rbac_server.core.config import settings
from rbac_server.core.exceptions import AuthenticationError
from rbac_server.db.session import get_store
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.principal import Principal
from rbac_server.models.user import User
from rbac_server.services.auth_service import auth_service
from rbac_server.services.authorization import (
    check_permission_membership,
    check_role_membership,
    check_user_access,
)

# Bearer scheme
security_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    issued_at_ms: int


def _token_pattern(prefix: str) -> "re.Pattern[str]":
    return re.compile(rf"^{re.escape(prefix)}-(\d+)-(\d+)$")


def create_access_token(user_id: int, issued_at_ms: Optional[int] = None) -> str:
    """Issue an opaque token for ``user_id``."""
    if issued_at_ms is None:
        issued_at_ms = int(time.time() * 1000)
    return f"{settings.TOKEN_PREFIX}-{user_id}-{issued_at_ms}"


def decode_token(token: str, now_ms: Optional[int] = None) -> TokenClaims:
    """Check the token shape and expiry window.

    Raises:
        AuthenticationError: If the token is malformed or expired.
    """
    match = _token_pattern(settings.TOKEN_PREFIX).match(token or "")
    if match is None:
        raise AuthenticationError("Invalid token format")

    claims = TokenClaims(user_id=int(match.group(1)), issued_at_ms=int(match.group(2)))

    if settings.TOKEN_EXPIRY_MINUTES > 0:
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        if now_ms - claims.issued_at_ms > settings.TOKEN_EXPIRY_MINUTES * 60 * 1000:
            raise AuthenticationError("Token has expired")

    return claims


def get_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    x_user_id: Optional[str] = Header(None),
    store: JsonDocumentStore = Depends(get_store),
) -> Principal:
    """Authenticate the request and resolve the acting principal."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")

    claims = decode_token(credentials.credentials)
    if settings.STRICT_TOKEN_BINDING and str(claims.user_id) != (x_user_id or "").strip():
        raise AuthenticationError("Token does not belong to this user")

    return auth_service.resolve_principal(store.snapshot(), x_user_id)


class RequireRole:
    """Dependency that checks the principal's role name against an allow-list."""

    def __init__(self, *roles: str):
        self.roles = roles

    def __call__(self, principal: Principal = Depends(get_principal)) -> Principal:
        check_role_membership(principal, self.roles)
        return principal


class RequirePermission:
    """Dependency that requires at least one of the listed permissions."""

    def __init__(self, *permissions: str):
        self.permissions = permissions

    def __call__(self, principal: Principal = Depends(get_principal)) -> Principal:
        check_permission_membership(principal, self.permissions)
        return principal


def require_user_access(
    user_id: int,
    principal: Principal = Depends(get_principal),
    store: JsonDocumentStore = Depends(get_store),
) -> User:
    """Resolve the ``user_id`` path target, enforcing hierarchy or self-access."""
    return check_user_access(principal, store.snapshot(), user_id)


# Convenience dependencies
require_management = RequireRole(*settings.MANAGEMENT_ROLES)

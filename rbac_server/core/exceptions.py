"""Custom exception classes for the RBAC server.

Every error carries a human-readable message and the HTTP status it maps
to. The application installs a single handler that renders any
:class:`RBACError` as ``{"message": ..., **extra}``.
"""

from typing import Any, Dict, Optional

from fastapi import status


class RBACError(Exception):
    """Base exception for the RBAC server."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred", extra: Optional[Dict[str, Any]] = None):
        self.message = message
        self.extra = extra or {}
        super().__init__(self.message)

    def to_content(self) -> Dict[str, Any]:
        return {"message": self.message, **self.extra}


class AuthenticationError(RBACError):
    """Raised when the caller cannot be authenticated."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(RBACError):
    """Raised when a role, permission or hierarchy check denies the caller."""
    status_code = status.HTTP_403_FORBIDDEN


class ResourceNotFoundError(RBACError):
    """Raised when a referenced user, role or permission is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class ResourceConflictError(RBACError):
    """Raised when a resource already exists or is still referenced."""
    status_code = status.HTTP_400_BAD_REQUEST


class RuleViolationError(RBACError):
    """Raised when a protective mutation rule rejects the request."""
    status_code = status.HTTP_400_BAD_REQUEST


class InternalInconsistencyError(RBACError):
    """Raised when stored data references something that no longer exists."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StoreError(RBACError):
    """Raised when the document store cannot be read or written."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

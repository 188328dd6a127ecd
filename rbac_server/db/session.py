"""Document store instance and dependency injection."""

from rbac_server.core.config import settings
from rbac_server.db.store import JsonDocumentStore

# One store per process; its write lock serializes every mutation.
store = JsonDocumentStore(settings.DOCUMENT_PATH)


def get_store() -> JsonDocumentStore:
    """FastAPI dependency that provides the document store."""
    return store

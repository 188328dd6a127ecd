"""Seeds for a fresh document: permissions, roles, super admin, sample users."""

from rbac_server.db.base import utc_timestamp
from rbac_server.db.seeds.seed_roles import seed_roles
from rbac_server.db.seeds.seed_sample_data import seed_sample_data
from rbac_server.db.seeds.seed_super_admin import seed_super_admin
from rbac_server.db.store import JsonDocumentStore
from rbac_server.models.document import Document


def seed_store(store: JsonDocumentStore, samples: bool = True, reset: bool = False) -> Document:
    """Apply every seed to ``store`` and persist the result.

    With ``reset`` the existing document is discarded first.
    """
    document = Document() if reset or not store.exists() else store.load()
    created_at = utc_timestamp()

    seed_roles(document, created_at)
    seed_super_admin(document, created_at)
    if samples:
        seed_sample_data(document, created_at)

    store.save(document)
    return document


__all__ = ["seed_roles", "seed_super_admin", "seed_sample_data", "seed_store"]

"""Seed the super-admin user from env vars."""

from rbac_server.core.config import settings
from rbac_server.models.document import Document
from rbac_server.models.user import User


def seed_super_admin(document: Document, created_at: str) -> None:
    """Create the super-admin user if not already present."""
    super_admin_role = document.find_role_by_name(settings.SUPER_ADMIN_ROLE_NAME)
    if super_admin_role is None:
        print(f"⚠️  {settings.SUPER_ADMIN_ROLE_NAME} role not found. Run seed_roles first.")
        return

    if document.find_user_by_username(settings.SUPER_ADMIN_USERNAME) is not None:
        print(f"ℹ️  Super admin '{settings.SUPER_ADMIN_USERNAME}' already exists, skipping.")
        return

    document.users.append(User(
        id=document.next_user_id(),
        username=settings.SUPER_ADMIN_USERNAME,
        password=settings.SUPER_ADMIN_PASSWORD,
        full_name="Super Admin",
        email=settings.SUPER_ADMIN_EMAIL,
        role_id=super_admin_role.id,
        is_active=True,
        is_super_admin=True,
        created_at=created_at,
    ))
    print(f"✅ Created super admin: {settings.SUPER_ADMIN_USERNAME}")

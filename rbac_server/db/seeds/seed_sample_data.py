"""Seed sample users for demo purposes."""

from rbac_server.core.config import settings
from rbac_server.models.document import Document
from rbac_server.models.user import User

SAMPLE_USERS = [
    # username, full name, role name
    ("admin", "Alice Admin", "Admin"),
    ("manager", "Mark Manager", "Manager"),
    ("employee", "Erin Employee", "Employee"),
    ("viewer", "Victor Viewer", "Viewer"),
]


def seed_sample_data(document: Document, created_at: str, password: str = "password123") -> None:
    """Insert one sample user per non-super-admin role, owned by the super admin."""
    owner = document.find_user_by_username(settings.SUPER_ADMIN_USERNAME)
    if owner is None:
        print("⚠️  No super admin found. Run seed_super_admin first.")
        return

    added = 0
    for username, full_name, role_name in SAMPLE_USERS:
        role = document.find_role_by_name(role_name)
        if role is None or document.find_user_by_username(username) is not None:
            continue
        document.users.append(User(
            id=document.next_user_id(),
            username=username,
            password=password,
            full_name=full_name,
            email=f"{username}@rbac.local",
            role_id=role.id,
            created_by=owner.id,
            created_at=created_at,
        ))
        added += 1

    print(f"✅ Seeded {added} sample users")

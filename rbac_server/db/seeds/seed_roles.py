"""Seed default permissions and roles into the document."""

from rbac_server.models.document import Document
from rbac_server.models.permission import Permission
from rbac_server.models.role import Role

PERMISSIONS = [
    ("VIEW_DASHBOARD", "View the dashboard", "Dashboard"),
    ("VIEW_USERS", "View users", "User Management"),
    ("CREATE_USERS", "Create users", "User Management"),
    ("EDIT_USERS", "Edit users", "User Management"),
    ("DELETE_USERS", "Delete users", "User Management"),
    ("VIEW_ROLES", "View roles", "Role Management"),
    ("CREATE_ROLES", "Create roles", "Role Management"),
    ("EDIT_ROLES", "Edit roles", "Role Management"),
    ("DELETE_ROLES", "Delete roles", "Role Management"),
]

ROLES = [
    # name, priority, is_system, permission names
    ("Super Admin", 1, True, [p[0] for p in PERMISSIONS]),
    ("Admin", 1, True, [p[0] for p in PERMISSIONS]),
    ("Manager", 2, False, [
        "VIEW_DASHBOARD", "VIEW_USERS", "CREATE_USERS", "EDIT_USERS",
        "DELETE_USERS", "VIEW_ROLES",
    ]),
    ("Employee", 3, False, ["VIEW_DASHBOARD", "VIEW_USERS"]),
    ("Viewer", 4, False, ["VIEW_DASHBOARD"]),
]


def seed_roles(document: Document, created_at: str) -> None:
    """Insert default permissions and roles that are not already present."""
    for name, description, category in PERMISSIONS:
        if not any(p.name == name for p in document.permissions):
            document.permissions.append(Permission(
                id=max((p.id for p in document.permissions), default=0) + 1,
                name=name,
                description=description,
                category=category,
            ))

    ids_by_name = {p.name: p.id for p in document.permissions}
    added = 0
    for name, priority, is_system, permission_names in ROLES:
        if document.find_role_by_name(name) is None:
            document.roles.append(Role(
                id=document.next_role_id(),
                name=name,
                priority=priority,
                permissions=[ids_by_name[n] for n in permission_names],
                is_system=is_system,
                created_at=created_at,
            ))
            added += 1

    print(f"✅ Seeded {len(document.permissions)} permissions, {added} new roles")

"""Shared fixtures: a temporary document store and an API client bound to it."""

import json

import pytest
from fastapi.testclient import TestClient

from rbac_server.core.security import create_access_token
from rbac_server.db.session import get_store
from rbac_server.db.store import JsonDocumentStore
from rbac_server.main import app
from rbac_server.services.auth_service import auth_service

SUPER_ADMIN_ID = 1
ADMIN_ID = 2
MANAGER_ID = 3
EMPLOYEE_ID = 4
VIEWER_ID = 5
INACTIVE_ID = 6
PEER_MANAGER_ID = 7
SECOND_ADMIN_ID = 8

SUPER_ADMIN_ROLE = 1
ADMIN_ROLE = 2
MANAGER_ROLE = 3
EMPLOYEE_ROLE = 4
VIEWER_ROLE = 5
INTERN_ROLE = 6


def _user(user_id, username, role_id, created_by=None, **extra):
    return {
        "id": user_id,
        "username": username,
        "password": "secret",
        "fullName": username.title(),
        "email": f"{username}@example.com",
        "roleId": role_id,
        "isActive": extra.pop("isActive", True),
        "isSuperAdmin": extra.pop("isSuperAdmin", False),
        "createdBy": created_by,
        "createdAt": "2024-01-01T00:00:00.000Z",
        **extra,
    }


def _role(role_id, name, priority, permissions, is_system=False):
    return {
        "id": role_id,
        "name": name,
        "description": f"{name} role",
        "priority": priority,
        "permissions": permissions,
        "isSystem": is_system,
        "createdAt": "2024-01-01T00:00:00.000Z",
    }


@pytest.fixture
def document_data() -> dict:
    """A small hierarchy: super admin, two admins, two managers, staff."""
    return {
        "permissions": [
            {"id": 1, "name": "VIEW_USERS", "description": "View users", "category": "Users"},
            {"id": 2, "name": "CREATE_USERS", "description": "Create users", "category": "Users"},
            {"id": 3, "name": "EDIT_USERS", "description": "Edit users", "category": "Users"},
            {"id": 4, "name": "DELETE_USERS", "description": "Delete users", "category": "Users"},
            {"id": 5, "name": "VIEW_ROLES", "description": "View roles", "category": "Roles"},
        ],
        "roles": [
            _role(SUPER_ADMIN_ROLE, "Super Admin", 1, [1, 2, 3, 4, 5], is_system=True),
            _role(ADMIN_ROLE, "Admin", 1, [1, 2, 3, 4, 5], is_system=True),
            _role(MANAGER_ROLE, "Manager", 2, [1, 2, 3]),
            _role(EMPLOYEE_ROLE, "Employee", 3, [{"id": 1}]),
            _role(VIEWER_ROLE, "Viewer", 4, []),
            _role(INTERN_ROLE, "Intern", 4, []),
        ],
        "users": [
            _user(SUPER_ADMIN_ID, "root", SUPER_ADMIN_ROLE, isSuperAdmin=True),
            _user(ADMIN_ID, "admin", ADMIN_ROLE, created_by=SUPER_ADMIN_ID),
            _user(MANAGER_ID, "amy", MANAGER_ROLE, created_by=SUPER_ADMIN_ID),
            _user(EMPLOYEE_ID, "eve", EMPLOYEE_ROLE, created_by={"id": MANAGER_ID}),
            _user(VIEWER_ID, "vic", VIEWER_ROLE, created_by=MANAGER_ID),
            _user(INACTIVE_ID, "ina", EMPLOYEE_ROLE, created_by=MANAGER_ID, isActive=False),
            _user(PEER_MANAGER_ID, "max", MANAGER_ROLE, created_by=SUPER_ADMIN_ID),
            _user(SECOND_ADMIN_ID, "pat", ADMIN_ROLE, created_by=SUPER_ADMIN_ID),
        ],
    }


@pytest.fixture
def store(tmp_path, document_data) -> JsonDocumentStore:
    path = tmp_path / "db.json"
    path.write_text(json.dumps(document_data, indent=2), encoding="utf-8")
    return JsonDocumentStore(path)


@pytest.fixture
def principal_for(store):
    """Build the principal of a stored user, as the resolver would."""
    def _principal(user_id: int):
        document = store.load()
        return auth_service.build_principal(document, document.find_user(user_id))
    return _principal


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(user_id: int) -> dict:
    return {
        "Authorization": f"Bearer {create_access_token(user_id)}",
        "x-user-id": str(user_id),
    }

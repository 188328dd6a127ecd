"""Tests for the mutation rules applied before every user and role write."""

import pytest

from rbac_server.core.exceptions import (
    AuthorizationError,
    ResourceConflictError,
    ResourceNotFoundError,
    RuleViolationError,
)
from rbac_server.services import rules
from rbac_server.services.auth_service import auth_service

from conftest import (
    ADMIN_ID, ADMIN_ROLE, EMPLOYEE_ID, EMPLOYEE_ROLE, INTERN_ROLE, MANAGER_ID,
    MANAGER_ROLE, PEER_MANAGER_ID, SECOND_ADMIN_ID, SUPER_ADMIN_ID,
    SUPER_ADMIN_ROLE, VIEWER_ID, VIEWER_ROLE,
)


@pytest.fixture
def document(store):
    return store.load()


# ---- Create user ----

def test_create_user_super_admin_flag_requires_super_admin(principal_for, document) -> None:
    with pytest.raises(AuthorizationError, match="Only super admins can create super admin users"):
        rules.check_user_create(principal_for(ADMIN_ID), document, "new", VIEWER_ROLE, True)

    rules.check_user_create(principal_for(SUPER_ADMIN_ID), document, "new", VIEWER_ROLE, True)


def test_create_user_role_must_be_reachable(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)

    with pytest.raises(AuthorizationError, match="cannot create users with Admin role"):
        rules.check_user_create(manager, document, "new", ADMIN_ROLE)

    rules.check_user_create(manager, document, "new", MANAGER_ROLE)
    rules.check_user_create(manager, document, "new", VIEWER_ROLE)
    rules.check_user_create(principal_for(SUPER_ADMIN_ID), document, "new", SUPER_ADMIN_ROLE)


def test_create_user_unknown_role(principal_for, document) -> None:
    with pytest.raises(ResourceNotFoundError):
        rules.check_user_create(principal_for(MANAGER_ID), document, "new", 999)


def test_create_user_duplicate_username(principal_for, document) -> None:
    with pytest.raises(ResourceConflictError, match="Username 'eve' is already in use."):
        rules.check_user_create(principal_for(MANAGER_ID), document, "eve", VIEWER_ROLE)


# ---- Update user ----

def test_update_user_super_admin_flag(principal_for, document) -> None:
    target = document.find_user(VIEWER_ID)

    with pytest.raises(AuthorizationError, match="super admin status"):
        rules.check_user_update(principal_for(ADMIN_ID), document, target, {"is_super_admin": True})

    # Restating the current value is not a change.
    rules.check_user_update(principal_for(ADMIN_ID), document, target, {"is_super_admin": False})
    rules.check_user_update(principal_for(SUPER_ADMIN_ID), document, target, {"is_super_admin": True})


def test_update_user_cannot_assign_stronger_role(principal_for, document) -> None:
    target = document.find_user(VIEWER_ID)
    with pytest.raises(AuthorizationError, match="You cannot assign Admin role"):
        rules.check_user_update(principal_for(MANAGER_ID), document, target, {"role_id": ADMIN_ROLE})


def test_update_user_cannot_move_stronger_user(principal_for, document) -> None:
    target = document.find_user(ADMIN_ID)
    with pytest.raises(AuthorizationError, match="You cannot modify users with Admin role"):
        rules.check_user_update(principal_for(MANAGER_ID), document, target, {"role_id": VIEWER_ROLE})


def test_update_user_demote_reachable_user(principal_for, document) -> None:
    target = document.find_user(VIEWER_ID)
    rules.check_user_update(principal_for(MANAGER_ID), document, target, {"role_id": EMPLOYEE_ROLE})


def test_update_user_self_escalation(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)
    with pytest.raises(AuthorizationError):
        rules.check_user_update(
            manager, document, document.find_user(MANAGER_ID), {"role_id": ADMIN_ROLE},
        )


def test_super_admin_cannot_elevate_own_role(document) -> None:
    user = document.find_user(EMPLOYEE_ID)
    user.is_super_admin = True
    elevated = auth_service.build_principal(document, user)

    with pytest.raises(AuthorizationError, match="You cannot elevate your own role"):
        rules.check_user_update(elevated, document, user, {"role_id": MANAGER_ROLE})


def test_update_user_self_demotion_allowed(principal_for, document) -> None:
    target = document.find_user(MANAGER_ID)
    rules.check_user_update(principal_for(MANAGER_ID), document, target, {"role_id": VIEWER_ROLE})


def test_update_user_unknown_role(principal_for, document) -> None:
    target = document.find_user(VIEWER_ID)
    with pytest.raises(ResourceNotFoundError):
        rules.check_user_update(principal_for(MANAGER_ID), document, target, {"role_id": 999})


def test_update_user_denial_is_repeatable(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)
    target = document.find_user(VIEWER_ID)
    messages = set()
    for _ in range(3):
        with pytest.raises(AuthorizationError) as excinfo:
            rules.check_user_update(manager, document, target, {"role_id": ADMIN_ROLE})
        messages.add(excinfo.value.message)
    assert len(messages) == 1


# ---- Delete user ----

def test_delete_super_admin_always_rejected(principal_for, document) -> None:
    target = document.find_user(SUPER_ADMIN_ID)
    for actor_id in (SUPER_ADMIN_ID, ADMIN_ID, MANAGER_ID):
        with pytest.raises(RuleViolationError, match="Cannot delete super admin user"):
            rules.check_user_delete(principal_for(actor_id), document, target)


def test_delete_self_rejected(principal_for, document) -> None:
    with pytest.raises(RuleViolationError, match="You cannot delete your own account"):
        rules.check_user_delete(principal_for(MANAGER_ID), document, document.find_user(MANAGER_ID))


def test_delete_user_hierarchy(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)

    with pytest.raises(AuthorizationError, match="within your role hierarchy"):
        rules.check_user_delete(manager, document, document.find_user(ADMIN_ID))

    rules.check_user_delete(manager, document, document.find_user(PEER_MANAGER_ID))
    rules.check_user_delete(manager, document, document.find_user(VIEWER_ID))


def test_admin_deletes_priority_one_user(principal_for, document) -> None:
    rules.check_user_delete(principal_for(ADMIN_ID), document, document.find_user(SECOND_ADMIN_ID))


# ---- Create role ----

def test_create_top_priority_role_requires_super_admin(principal_for, document) -> None:
    with pytest.raises(AuthorizationError, match="priority 1"):
        rules.check_role_create(principal_for(ADMIN_ID), document, "Boss", 1)

    rules.check_role_create(principal_for(SUPER_ADMIN_ID), document, "Boss", 1)


def test_create_role_above_own_level(principal_for, document) -> None:
    employee = principal_for(EMPLOYEE_ID)
    with pytest.raises(AuthorizationError, match="at your level or below"):
        rules.check_role_create(employee, document, "Lead", 2)

    rules.check_role_create(employee, document, "Peer", 3)
    rules.check_role_create(employee, document, "Junior", 5, [1])


def test_create_role_duplicate_name(principal_for, document) -> None:
    with pytest.raises(ResourceConflictError):
        rules.check_role_create(principal_for(SUPER_ADMIN_ID), document, "viewer", 4)


def test_create_role_unknown_permission(principal_for, document) -> None:
    with pytest.raises(ResourceNotFoundError, match="42"):
        rules.check_role_create(principal_for(SUPER_ADMIN_ID), document, "New", 4, [1, 42])


# ---- Update role ----

def test_update_system_role_to_top_requires_super_admin(principal_for, document) -> None:
    admin_role = document.find_role(ADMIN_ROLE)
    with pytest.raises(AuthorizationError, match="Only super admins can modify super admin roles"):
        rules.check_role_update(principal_for(ADMIN_ID), document, admin_role, {"priority": 1})

    rules.check_role_update(principal_for(SUPER_ADMIN_ID), document, admin_role, {"priority": 1})
    rules.check_role_update(principal_for(ADMIN_ID), document, admin_role, {"description": "x"})


def test_update_role_hierarchy(principal_for, document) -> None:
    with pytest.raises(AuthorizationError, match="Your role: Manager"):
        rules.check_role_update(
            principal_for(MANAGER_ID), document, document.find_role(ADMIN_ROLE), {"name": "x"},
        )


def test_manager_cannot_elevate_own_role(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)
    with pytest.raises(AuthorizationError, match="You cannot elevate your own role"):
        rules.check_role_update(manager, document, document.find_role(MANAGER_ROLE), {"priority": 1})


def test_manager_cannot_raise_other_role_above_self(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)
    with pytest.raises(AuthorizationError):
        rules.check_role_update(manager, document, document.find_role(INTERN_ROLE), {"priority": 1})

    rules.check_role_update(manager, document, document.find_role(INTERN_ROLE), {"priority": 3})
    rules.check_role_update(manager, document, document.find_role(INTERN_ROLE), {"priority": 2})


def test_update_role_rename_conflict(principal_for, document) -> None:
    manager = principal_for(MANAGER_ID)
    intern = document.find_role(INTERN_ROLE)

    with pytest.raises(ResourceConflictError):
        rules.check_role_update(manager, document, intern, {"name": "Viewer"})
    rules.check_role_update(manager, document, intern, {"name": "intern"})


# ---- Delete role ----

def test_delete_super_admin_role(principal_for, document) -> None:
    with pytest.raises(RuleViolationError, match="Cannot delete Super Admin role"):
        rules.check_role_delete(principal_for(SUPER_ADMIN_ID), document, document.find_role(SUPER_ADMIN_ROLE))


def test_delete_role_in_use_reports_count(principal_for, document) -> None:
    with pytest.raises(ResourceConflictError) as excinfo:
        rules.check_role_delete(principal_for(SUPER_ADMIN_ID), document, document.find_role(EMPLOYEE_ROLE))

    assert excinfo.value.extra == {"userCount": 2}


def test_delete_system_role(principal_for, document) -> None:
    document.users = [u for u in document.users if u.role_id != ADMIN_ROLE]
    with pytest.raises(RuleViolationError, match="Cannot delete system role"):
        rules.check_role_delete(principal_for(SUPER_ADMIN_ID), document, document.find_role(ADMIN_ROLE))


def test_delete_unused_role(principal_for, document) -> None:
    rules.check_role_delete(principal_for(MANAGER_ID), document, document.find_role(INTERN_ROLE))


def test_delete_role_outside_hierarchy(principal_for, document) -> None:
    document.find_role(INTERN_ROLE).priority = 1
    with pytest.raises(AuthorizationError, match="within your role hierarchy"):
        rules.check_role_delete(principal_for(MANAGER_ID), document, document.find_role(INTERN_ROLE))

"""Wire operation table for the RBAC API.

Maps each wire operation name (``POST /rbac/<name>``) to the dispatcher and
method handling it, and to the entity type the request ``entity`` decodes to.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from rbac_gateway.core.models import (
    PermGrant,
    PermObj,
    Permission,
    Role,
    RoleRelationship,
    SDSet,
    User,
    UserRole,
)

ACCESS = "access"
ADMIN = "admin"
REVIEW = "review"


@dataclass(frozen=True)
class Operation:
    dispatcher: str
    method: str
    entity_type: Optional[type]


def _table(dispatcher: str, *entries) -> Dict[str, Operation]:
    return {name: Operation(dispatcher, method, entity_type) for name, method, entity_type in entries}


OPERATIONS: Dict[str, Operation] = {
    **_table(
        ACCESS,
        ("authenticate", "authenticate", User),
        ("createSession", "create_session", User),
        ("createSessionTrusted", "create_session_trusted", User),
        ("checkAccess", "check_access", Permission),
        ("sessionPermissions", "session_permissions", None),
        ("sessionRoles", "session_roles", None),
        ("authorizedSessionRoles", "authorized_session_roles", None),
        ("addActiveRole", "add_active_role", UserRole),
        ("dropActiveRole", "drop_active_role", UserRole),
        ("getUserId", "get_user_id", None),
        ("getUser", "get_user", None),
    ),
    **_table(
        ADMIN,
        ("addUser", "add_user", User),
        ("updateUser", "update_user", User),
        ("deleteUser", "delete_user", User),
        ("disableUser", "disable_user", User),
        ("changePassword", "change_password", User),
        ("lockUserAccount", "lock_user_account", User),
        ("unlockUserAccount", "unlock_user_account", User),
        ("resetPassword", "reset_password", User),
        ("assignUser", "assign_user", UserRole),
        ("deassignUser", "deassign_user", UserRole),
        ("addRole", "add_role", Role),
        ("updateRole", "update_role", Role),
        ("deleteRole", "delete_role", Role),
        ("addPermission", "add_permission", Permission),
        ("updatePermission", "update_permission", Permission),
        ("deletePermission", "delete_permission", Permission),
        ("addPermObj", "add_perm_obj", PermObj),
        ("updatePermObj", "update_perm_obj", PermObj),
        ("deletePermObj", "delete_perm_obj", PermObj),
        ("grant", "grant", PermGrant),
        ("revoke", "revoke", PermGrant),
        # user-targeted aliases; routing is decided by the grant's fields
        ("grantUser", "grant", PermGrant),
        ("revokeUser", "revoke", PermGrant),
        ("addDescendant", "add_descendant", RoleRelationship),
        ("addAscendant", "add_ascendant", RoleRelationship),
        ("addInheritance", "add_inheritance", RoleRelationship),
        ("deleteInheritance", "delete_inheritance", RoleRelationship),
        ("createSsdSet", "create_ssd_set", SDSet),
        ("updateSsdSet", "update_ssd_set", SDSet),
        ("deleteSsdSet", "delete_ssd_set", SDSet),
        ("addSsdRoleMember", "add_ssd_role_member", SDSet),
        ("deleteSsdRoleMember", "delete_ssd_role_member", SDSet),
        ("setSsdSetCardinality", "set_ssd_set_cardinality", SDSet),
        ("createDsdSet", "create_dsd_set", SDSet),
        ("updateDsdSet", "update_dsd_set", SDSet),
        ("deleteDsdSet", "delete_dsd_set", SDSet),
        ("addDsdRoleMember", "add_dsd_role_member", SDSet),
        ("deleteDsdRoleMember", "delete_dsd_role_member", SDSet),
        ("setDsdSetCardinality", "set_dsd_set_cardinality", SDSet),
    ),
    **_table(
        REVIEW,
        ("readPermission", "read_permission", Permission),
        ("readPermObj", "read_perm_obj", PermObj),
        ("findPermissions", "find_permissions", Permission),
        ("findPermObjs", "find_perm_objs", PermObj),
        ("readRole", "read_role", Role),
        # searchValue carries the filter; a Role entity is accepted as a fallback
        ("findRoles", "find_roles", Role),
        ("readUser", "read_user", User),
        ("findUsers", "find_users", User),
        ("assignedUsers", "assigned_users", Role),
        ("assignedRoles", "assigned_roles", User),
        ("authorizedUsers", "authorized_users", Role),
        ("authorizedRoles", "authorized_roles", User),
        ("permissionRoles", "permission_roles", Permission),
        ("authorizedPermissionRoles", "authorized_permission_roles", Permission),
        ("permissionUsers", "permission_users", Permission),
        ("authorizedPermissionUsers", "authorized_permission_users", Permission),
        ("userPermissions", "user_permissions", User),
        ("rolePermissions", "role_permissions", Role),
        ("ssdRoleSets", "ssd_role_sets", Role),
        ("ssdRoleSet", "ssd_role_set", SDSet),
        ("ssdRoleSetRoles", "ssd_role_set_roles", SDSet),
        ("ssdRoleSetCardinality", "ssd_role_set_cardinality", SDSet),
        ("ssdSets", "ssd_sets", SDSet),
        ("dsdRoleSets", "dsd_role_sets", Role),
        ("dsdRoleSet", "dsd_role_set", SDSet),
        ("dsdRoleSetRoles", "dsd_role_set_roles", SDSet),
        ("dsdRoleSetCardinality", "dsd_role_set_cardinality", SDSet),
        ("dsdSets", "dsd_sets", SDSet),
    ),
}

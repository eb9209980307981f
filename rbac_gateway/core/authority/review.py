"""Review authority handle: read-only queries over the RBAC store."""
from __future__ import annotations
from typing import List, Set

from ..models import OrgUnit, PermObj, Permission, Role, SDSet, User, UserRole
from .base import AuthorityManager, decode_entity, decode_int, decode_list, decode_name_set, decode_names


class ReviewManager(AuthorityManager):
    """Queries for users, roles, permissions and separation-of-duty sets.

    Methods returning ``List[str]`` yield identifiers only; those returning
    ``Set[str]`` include names inherited through the role hierarchy.
    """

    manager_path = "reviewMgr"

    # ─────────────────────────────────────────────────────────────────────
    # Permissions
    # ─────────────────────────────────────────────────────────────────────
    def read_permission(self, permission: Permission) -> Permission:
        return decode_entity(Permission, self._call("readPermission", permission=permission))

    def read_perm_obj(self, perm_obj: PermObj) -> PermObj:
        return decode_entity(PermObj, self._call("readPermObj", permObj=perm_obj))

    def find_permissions(self, permission: Permission) -> List[Permission]:
        return decode_list(Permission, self._call("findPermissions", permission=permission))

    def find_perm_objs(self, perm_obj: PermObj) -> List[PermObj]:
        return decode_list(PermObj, self._call("findPermObjs", permObj=perm_obj))

    def find_perm_objs_by_ou(self, org_unit: OrgUnit) -> List[PermObj]:
        return decode_list(PermObj, self._call("findPermObjs", orgUnit=org_unit))

    # ─────────────────────────────────────────────────────────────────────
    # Roles
    # ─────────────────────────────────────────────────────────────────────
    def read_role(self, role: Role) -> Role:
        return decode_entity(Role, self._call("readRole", role=role))

    def find_roles(self, search_value: str) -> List[Role]:
        return decode_list(Role, self._call("findRoles", searchValue=search_value))

    def find_role_names(self, search_value: str, limit: int) -> List[str]:
        return decode_names(self._call("findRoleNames", searchValue=search_value, limit=limit))

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────
    def read_user(self, user: User) -> User:
        return decode_entity(User, self._call("readUser", user=user))

    def find_users(self, user: User) -> List[User]:
        return decode_list(User, self._call("findUsers", user=user))

    def find_users_by_ou(self, org_unit: OrgUnit) -> List[User]:
        return decode_list(User, self._call("findUsers", orgUnit=org_unit))

    def find_user_ids(self, user: User, limit: int) -> List[str]:
        return decode_names(self._call("findUserIds", user=user, limit=limit))

    def assigned_users(self, role: Role) -> List[User]:
        return decode_list(User, self._call("assignedUsers", role=role))

    def assigned_user_ids(self, role: Role, limit: int) -> List[str]:
        return decode_names(self._call("assignedUserIds", role=role, limit=limit))

    def assigned_roles(self, user: User) -> List[UserRole]:
        return decode_list(UserRole, self._call("assignedRoles", user=user))

    def assigned_role_names(self, user_id: str) -> List[str]:
        return decode_names(self._call("assignedRoleNames", userId=user_id))

    def authorized_users(self, role: Role) -> List[User]:
        return decode_list(User, self._call("authorizedUsers", role=role))

    def authorized_roles(self, user: User) -> Set[str]:
        return decode_name_set(self._call("authorizedRoles", user=user))

    # ─────────────────────────────────────────────────────────────────────
    # Permission assignments
    # ─────────────────────────────────────────────────────────────────────
    def permission_roles(self, permission: Permission) -> List[str]:
        return decode_names(self._call("permissionRoles", permission=permission))

    def authorized_permission_roles(self, permission: Permission) -> Set[str]:
        return decode_name_set(self._call("authorizedPermissionRoles", permission=permission))

    def permission_users(self, permission: Permission) -> List[str]:
        return decode_names(self._call("permissionUsers", permission=permission))

    def authorized_permission_users(self, permission: Permission) -> Set[str]:
        return decode_name_set(self._call("authorizedPermissionUsers", permission=permission))

    def user_permissions(self, user: User) -> List[Permission]:
        return decode_list(Permission, self._call("userPermissions", user=user))

    def role_permissions(self, role: Role) -> List[Permission]:
        return decode_list(Permission, self._call("rolePermissions", role=role))

    # ─────────────────────────────────────────────────────────────────────
    # Separation of duty
    # ─────────────────────────────────────────────────────────────────────
    def ssd_role_sets(self, role: Role) -> List[SDSet]:
        return decode_list(SDSet, self._call("ssdRoleSets", role=role))

    def ssd_role_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("ssdRoleSet", sdSet=sd_set))

    def ssd_role_set_roles(self, sd_set: SDSet) -> Set[str]:
        return decode_name_set(self._call("ssdRoleSetRoles", sdSet=sd_set))

    def ssd_role_set_cardinality(self, sd_set: SDSet) -> int:
        return decode_int(self._call("ssdRoleSetCardinality", sdSet=sd_set))

    def ssd_sets(self, sd_set: SDSet) -> List[SDSet]:
        return decode_list(SDSet, self._call("ssdSets", sdSet=sd_set))

    def dsd_role_sets(self, role: Role) -> List[SDSet]:
        return decode_list(SDSet, self._call("dsdRoleSets", role=role))

    def dsd_role_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("dsdRoleSet", sdSet=sd_set))

    def dsd_role_set_roles(self, sd_set: SDSet) -> Set[str]:
        return decode_name_set(self._call("dsdRoleSetRoles", sdSet=sd_set))

    def dsd_role_set_cardinality(self, sd_set: SDSet) -> int:
        return decode_int(self._call("dsdRoleSetCardinality", sdSet=sd_set))

    def dsd_sets(self, sd_set: SDSet) -> List[SDSet]:
        return decode_list(SDSet, self._call("dsdSets", sdSet=sd_set))

"""Administration and delegated administration authority handles."""
from __future__ import annotations
from typing import Union

from ..models import AdminRole, PermObj, Permission, Role, SDSet, User, UserRole
from .base import AuthorityManager, decode_entity


GrantTarget = Union[Role, User]


def _target_argument(target: GrantTarget) -> dict:
    """Name the grant target argument after its kind (role or user)."""
    if isinstance(target, User):
        return {"user": target}
    return {"role": target}


class AdminManager(AuthorityManager):
    """Regular RBAC administration: users, roles, permissions, hierarchy, SoD."""

    manager_path = "adminMgr"

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────
    def add_user(self, user: User) -> User:
        return decode_entity(User, self._call("addUser", user=user))

    def update_user(self, user: User) -> User:
        return decode_entity(User, self._call("updateUser", user=user))

    def delete_user(self, user: User) -> None:
        self._call("deleteUser", user=user)

    def disable_user(self, user: User) -> None:
        self._call("disableUser", user=user)

    def change_password(self, user: User, new_password: str) -> None:
        """Replace the user's password; ``user.password`` holds the current one."""
        self._call("changePassword", user=user, newPassword=new_password)

    def lock_user_account(self, user: User) -> None:
        self._call("lockUserAccount", user=user)

    def unlock_user_account(self, user: User) -> None:
        self._call("unlockUserAccount", user=user)

    def reset_password(self, user: User, new_password: str) -> None:
        self._call("resetPassword", user=user, newPassword=new_password)

    def assign_user(self, user_role: UserRole) -> None:
        self._call("assignUser", userRole=user_role)

    def deassign_user(self, user_role: UserRole) -> None:
        self._call("deassignUser", userRole=user_role)

    # ─────────────────────────────────────────────────────────────────────
    # Roles and permissions
    # ─────────────────────────────────────────────────────────────────────
    def add_role(self, role: Role) -> Role:
        return decode_entity(Role, self._call("addRole", role=role))

    def update_role(self, role: Role) -> Role:
        return decode_entity(Role, self._call("updateRole", role=role))

    def delete_role(self, role: Role) -> None:
        self._call("deleteRole", role=role)

    def add_permission(self, permission: Permission) -> Permission:
        return decode_entity(Permission, self._call("addPermission", permission=permission))

    def update_permission(self, permission: Permission) -> Permission:
        return decode_entity(Permission, self._call("updatePermission", permission=permission))

    def delete_permission(self, permission: Permission) -> None:
        self._call("deletePermission", permission=permission)

    def add_perm_obj(self, perm_obj: PermObj) -> PermObj:
        return decode_entity(PermObj, self._call("addPermObj", permObj=perm_obj))

    def update_perm_obj(self, perm_obj: PermObj) -> PermObj:
        return decode_entity(PermObj, self._call("updatePermObj", permObj=perm_obj))

    def delete_perm_obj(self, perm_obj: PermObj) -> None:
        self._call("deletePermObj", permObj=perm_obj)

    def grant_permission(self, permission: Permission, target: GrantTarget) -> None:
        self._call("grantPermission", permission=permission, **_target_argument(target))

    def revoke_permission(self, permission: Permission, target: GrantTarget) -> None:
        self._call("revokePermission", permission=permission, **_target_argument(target))

    # ─────────────────────────────────────────────────────────────────────
    # Role hierarchy
    # ─────────────────────────────────────────────────────────────────────
    def add_descendant(self, parent: Role, child: Role) -> None:
        """Create ``child`` as a new role directly below existing ``parent``."""
        self._call("addDescendant", parent=parent, child=child)

    def add_ascendant(self, child: Role, parent: Role) -> None:
        """Create ``parent`` as a new role directly above existing ``child``.

        The existing role comes first, unlike the other hierarchy calls.
        """
        self._call("addAscendant", child=child, parent=parent)

    def add_inheritance(self, parent: Role, child: Role) -> None:
        self._call("addInheritance", parent=parent, child=child)

    def delete_inheritance(self, parent: Role, child: Role) -> None:
        self._call("deleteInheritance", parent=parent, child=child)

    # ─────────────────────────────────────────────────────────────────────
    # Static separation of duty
    # ─────────────────────────────────────────────────────────────────────
    def create_ssd_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("createSsdSet", sdSet=sd_set))

    def update_ssd_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("updateSsdSet", sdSet=sd_set))

    def delete_ssd_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("deleteSsdSet", sdSet=sd_set))

    def add_ssd_role_member(self, sd_set: SDSet, role: Role) -> SDSet:
        return decode_entity(SDSet, self._call("addSsdRoleMember", sdSet=sd_set, role=role))

    def delete_ssd_role_member(self, sd_set: SDSet, role: Role) -> SDSet:
        return decode_entity(SDSet, self._call("deleteSsdRoleMember", sdSet=sd_set, role=role))

    def set_ssd_set_cardinality(self, sd_set: SDSet, cardinality: int) -> SDSet:
        return decode_entity(SDSet, self._call("setSsdSetCardinality", sdSet=sd_set, cardinality=cardinality))

    # ─────────────────────────────────────────────────────────────────────
    # Dynamic separation of duty
    # ─────────────────────────────────────────────────────────────────────
    def create_dsd_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("createDsdSet", sdSet=sd_set))

    def update_dsd_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("updateDsdSet", sdSet=sd_set))

    def delete_dsd_set(self, sd_set: SDSet) -> SDSet:
        return decode_entity(SDSet, self._call("deleteDsdSet", sdSet=sd_set))

    def add_dsd_role_member(self, sd_set: SDSet, role: Role) -> SDSet:
        return decode_entity(SDSet, self._call("addDsdRoleMember", sdSet=sd_set, role=role))

    def delete_dsd_role_member(self, sd_set: SDSet, role: Role) -> SDSet:
        return decode_entity(SDSet, self._call("deleteDsdRoleMember", sdSet=sd_set, role=role))

    def set_dsd_set_cardinality(self, sd_set: SDSet, cardinality: int) -> SDSet:
        return decode_entity(SDSet, self._call("setDsdSetCardinality", sdSet=sd_set, cardinality=cardinality))


class DelegatedAdminManager(AuthorityManager):
    """Delegated administration: grants within the administrative permission space."""

    manager_path = "delAdminMgr"

    def grant_permission(self, permission: Permission, target: Union[AdminRole, User]) -> None:
        self._call("grantPermission", permission=permission, **_target_argument(target))

    def revoke_permission(self, permission: Permission, target: Union[AdminRole, User]) -> None:
        self._call("revokePermission", permission=permission, **_target_argument(target))

"""Administration dispatcher.

Maps administrative requests onto the regular administration authority, the
delegated administration authority (administrative grants) and, for account
state changes, a follow-up read through the review authority.

Response conventions:
    - delete, disable, assign and deassign echo the request entity
    - add and update return the entity as stored by the engine
    - account state changes (password, lock, unlock, reset) return the user
      re-read after the change
    - hierarchy edges and grants echo the request entity
    - separation-of-duty set operations return the engine's set
"""
from __future__ import annotations
import logging
from typing import Tuple, Union

from .authority import AdminManager, AuthorityFactory, DelegatedAdminManager, ReviewManager
from .dispatch import expect_entity, rbac_operation
from .envelope import RbacRequest, RbacResponse
from .errors import InvalidEntity, InvalidGrantTarget
from .models import (
    AdminRole,
    PermGrant,
    PermObj,
    Permission,
    Role,
    RoleRelationship,
    SDSet,
    User,
    UserRole,
)
from .session_context import attach_session

logger = logging.getLogger(__name__)


def resolve_grant(grant: PermGrant) -> Tuple[Permission, Union[Role, User]]:
    """Build the permission and target object for a grant or revoke.

    The grant's ``admin`` flag is copied onto the permission. A role target
    becomes an AdminRole in the administrative space and a Role otherwise;
    a user target is always a User.

    Raises:
        InvalidGrantTarget: If both or neither of roleNm/userId are set
        InvalidEntity: If ``admin`` is not a JSON boolean
    """
    # the flag selects the authority; "false" must not route as administrative
    if not isinstance(grant.admin, bool):
        raise InvalidEntity(f"Grant admin flag must be a boolean, got {grant.admin!r}")
    has_role = bool(grant.role_nm)
    has_user = bool(grant.user_id)
    if has_role and has_user:
        raise InvalidGrantTarget("Grant names both roleNm and userId; exactly one is allowed")
    if not has_role and not has_user:
        raise InvalidGrantTarget("Grant names neither roleNm nor userId")

    permission = Permission(
        obj_name=grant.obj_name,
        op_name=grant.op_name,
        obj_id=grant.obj_id,
        admin=grant.admin,
    )
    if has_role:
        target = AdminRole(name=grant.role_nm) if grant.admin else Role(name=grant.role_nm)
    else:
        target = User(user_id=grant.user_id)
    return permission, target


def _relationship(request: RbacRequest) -> RoleRelationship:
    rel = expect_entity(request, RoleRelationship)
    if rel.parent is None or rel.child is None:
        raise InvalidEntity("Role relationship needs both parent and child")
    return rel


class AdminDispatcher:
    """Administration operations over users, roles, permissions, hierarchy and SoD sets."""

    def __init__(self, factory: AuthorityFactory):
        self.factory = factory

    def _admin(self, request: RbacRequest) -> AdminManager:
        return attach_session(self.factory.admin_manager(request.context_id), request)

    def _delegated(self, request: RbacRequest) -> DelegatedAdminManager:
        return attach_session(self.factory.delegated_admin_manager(request.context_id), request)

    def _review(self, request: RbacRequest) -> ReviewManager:
        return attach_session(self.factory.review_manager(request.context_id), request)

    def _grant_authority(self, request: RbacRequest, admin: bool):
        """Delegated administration for administrative grants, regular otherwise."""
        if admin:
            return self._delegated(request)
        return self._admin(request)

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def add_user(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(entity=self._admin(request).add_user(user))

    @rbac_operation
    def update_user(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(entity=self._admin(request).update_user(user))

    @rbac_operation
    def delete_user(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        self._admin(request).delete_user(user)
        return RbacResponse(entity=user)

    @rbac_operation
    def disable_user(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        self._admin(request).disable_user(user)
        return RbacResponse(entity=user)

    @rbac_operation
    def change_password(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        self._admin(request).change_password(user, user.new_password)
        return RbacResponse(entity=self._review(request).read_user(user))

    @rbac_operation
    def lock_user_account(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        self._admin(request).lock_user_account(user)
        return RbacResponse(entity=self._review(request).read_user(user))

    @rbac_operation
    def unlock_user_account(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        self._admin(request).unlock_user_account(user)
        return RbacResponse(entity=self._review(request).read_user(user))

    @rbac_operation
    def reset_password(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        self._admin(request).reset_password(user, user.new_password)
        return RbacResponse(entity=self._review(request).read_user(user))

    @rbac_operation
    def assign_user(self, request: RbacRequest) -> RbacResponse:
        user_role = expect_entity(request, UserRole)
        self._admin(request).assign_user(user_role)
        return RbacResponse(entity=user_role)

    @rbac_operation
    def deassign_user(self, request: RbacRequest) -> RbacResponse:
        user_role = expect_entity(request, UserRole)
        self._admin(request).deassign_user(user_role)
        return RbacResponse(entity=user_role)

    # ─────────────────────────────────────────────────────────────────────
    # Roles, permissions, permission objects
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def add_role(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entity=self._admin(request).add_role(role))

    @rbac_operation
    def update_role(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entity=self._admin(request).update_role(role))

    @rbac_operation
    def delete_role(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        self._admin(request).delete_role(role)
        return RbacResponse(entity=role)

    @rbac_operation
    def add_permission(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(entity=self._admin(request).add_permission(permission))

    @rbac_operation
    def update_permission(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(entity=self._admin(request).update_permission(permission))

    @rbac_operation
    def delete_permission(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        self._admin(request).delete_permission(permission)
        return RbacResponse(entity=permission)

    @rbac_operation
    def add_perm_obj(self, request: RbacRequest) -> RbacResponse:
        perm_obj = expect_entity(request, PermObj)
        return RbacResponse(entity=self._admin(request).add_perm_obj(perm_obj))

    @rbac_operation
    def update_perm_obj(self, request: RbacRequest) -> RbacResponse:
        perm_obj = expect_entity(request, PermObj)
        return RbacResponse(entity=self._admin(request).update_perm_obj(perm_obj))

    @rbac_operation
    def delete_perm_obj(self, request: RbacRequest) -> RbacResponse:
        perm_obj = expect_entity(request, PermObj)
        self._admin(request).delete_perm_obj(perm_obj)
        return RbacResponse(entity=perm_obj)

    # ─────────────────────────────────────────────────────────────────────
    # Grants
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def grant(self, request: RbacRequest) -> RbacResponse:
        """Grant a permission to a role or user, routed by the admin flag."""
        grant = expect_entity(request, PermGrant)
        permission, target = resolve_grant(grant)
        logger.debug("grant %s.%s to %s (admin=%s)", grant.obj_name, grant.op_name, target, grant.admin)
        self._grant_authority(request, grant.admin).grant_permission(permission, target)
        return RbacResponse(entity=grant)

    @rbac_operation
    def revoke(self, request: RbacRequest) -> RbacResponse:
        grant = expect_entity(request, PermGrant)
        permission, target = resolve_grant(grant)
        logger.debug("revoke %s.%s from %s (admin=%s)", grant.obj_name, grant.op_name, target, grant.admin)
        self._grant_authority(request, grant.admin).revoke_permission(permission, target)
        return RbacResponse(entity=grant)

    # ─────────────────────────────────────────────────────────────────────
    # Role hierarchy
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def add_descendant(self, request: RbacRequest) -> RbacResponse:
        rel = _relationship(request)
        self._admin(request).add_descendant(rel.parent, rel.child)
        return RbacResponse(entity=rel)

    @rbac_operation
    def add_ascendant(self, request: RbacRequest) -> RbacResponse:
        rel = _relationship(request)
        # existing child first, new parent second
        self._admin(request).add_ascendant(rel.child, rel.parent)
        return RbacResponse(entity=rel)

    @rbac_operation
    def add_inheritance(self, request: RbacRequest) -> RbacResponse:
        rel = _relationship(request)
        self._admin(request).add_inheritance(rel.parent, rel.child)
        return RbacResponse(entity=rel)

    @rbac_operation
    def delete_inheritance(self, request: RbacRequest) -> RbacResponse:
        rel = _relationship(request)
        self._admin(request).delete_inheritance(rel.parent, rel.child)
        return RbacResponse(entity=rel)

    # ─────────────────────────────────────────────────────────────────────
    # Static separation of duty
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def create_ssd_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).create_ssd_set(sd_set))

    @rbac_operation
    def update_ssd_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).update_ssd_set(sd_set))

    @rbac_operation
    def delete_ssd_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).delete_ssd_set(sd_set))

    @rbac_operation
    def add_ssd_role_member(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        role = Role(name=request.search_value)
        return RbacResponse(entity=self._admin(request).add_ssd_role_member(sd_set, role))

    @rbac_operation
    def delete_ssd_role_member(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        role = Role(name=request.search_value)
        return RbacResponse(entity=self._admin(request).delete_ssd_role_member(sd_set, role))

    @rbac_operation
    def set_ssd_set_cardinality(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).set_ssd_set_cardinality(sd_set, sd_set.cardinality))

    # ─────────────────────────────────────────────────────────────────────
    # Dynamic separation of duty
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def create_dsd_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).create_dsd_set(sd_set))

    @rbac_operation
    def update_dsd_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).update_dsd_set(sd_set))

    @rbac_operation
    def delete_dsd_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).delete_dsd_set(sd_set))

    @rbac_operation
    def add_dsd_role_member(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        role = Role(name=request.search_value)
        return RbacResponse(entity=self._admin(request).add_dsd_role_member(sd_set, role))

    @rbac_operation
    def delete_dsd_role_member(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        role = Role(name=request.search_value)
        return RbacResponse(entity=self._admin(request).delete_dsd_role_member(sd_set, role))

    @rbac_operation
    def set_dsd_set_cardinality(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._admin(request).set_dsd_set_cardinality(sd_set, sd_set.cardinality))

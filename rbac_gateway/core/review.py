"""Review dispatcher.

Read-only queries. The request determines the result shape:

    - ``limit`` set on findRoles/findUsers/assignedUsers -> ``values`` (names)
    - a non-empty ``ou`` on findUsers/findPermObjs      -> org-unit search
    - ``searchValue`` set on assignedRoles                -> ``values`` (role names)
    - hierarchy-aware enumerations                        -> ``valueSet``
"""
from __future__ import annotations
from dataclasses import replace

from .authority import AuthorityFactory, ReviewManager
from .dispatch import expect_entity, rbac_operation
from .envelope import RbacRequest, RbacResponse
from .models import OrgUnit, OrgUnitType, PermObj, Permission, Role, SDSet, User
from .session_context import attach_session


class ReviewDispatcher:
    """Maps review requests onto the review authority."""

    def __init__(self, factory: AuthorityFactory):
        self.factory = factory

    def _review(self, request: RbacRequest) -> ReviewManager:
        return attach_session(self.factory.review_manager(request.context_id), request)

    # ─────────────────────────────────────────────────────────────────────
    # Permissions and permission objects
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def read_permission(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(entity=self._review(request).read_permission(permission))

    @rbac_operation
    def read_perm_obj(self, request: RbacRequest) -> RbacResponse:
        perm_obj = expect_entity(request, PermObj)
        return RbacResponse(entity=self._review(request).read_perm_obj(perm_obj))

    @rbac_operation
    def find_permissions(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(entities=self._review(request).find_permissions(permission))

    @rbac_operation
    def find_perm_objs(self, request: RbacRequest) -> RbacResponse:
        perm_obj = expect_entity(request, PermObj)
        review = self._review(request)
        if perm_obj.ou:
            return RbacResponse(entities=review.find_perm_objs_by_ou(OrgUnit(perm_obj.ou, OrgUnitType.PERM)))
        return RbacResponse(entities=review.find_perm_objs(perm_obj))

    # ─────────────────────────────────────────────────────────────────────
    # Roles
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def read_role(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entity=self._review(request).read_role(role))

    @rbac_operation
    def find_roles(self, request: RbacRequest) -> RbacResponse:
        """Search roles by the raw ``searchValue``, or by the Role entity's name."""
        search_value = request.search_value
        if search_value is None:
            search_value = expect_entity(request, Role).name
        review = self._review(request)
        if request.limit is not None:
            return RbacResponse(values=review.find_role_names(search_value, request.limit))
        return RbacResponse(entities=review.find_roles(search_value))

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def read_user(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(entity=self._review(request).read_user(user))

    @rbac_operation
    def find_users(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        review = self._review(request)
        if request.limit is not None:
            return RbacResponse(values=review.find_user_ids(user, request.limit))
        if user.ou:
            return RbacResponse(entities=review.find_users_by_ou(OrgUnit(user.ou, OrgUnitType.USER)))
        return RbacResponse(entities=review.find_users(user))

    @rbac_operation
    def assigned_users(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        review = self._review(request)
        if request.limit is not None:
            return RbacResponse(values=review.assigned_user_ids(role, request.limit))
        return RbacResponse(entities=review.assigned_users(role))

    @rbac_operation
    def assigned_roles(self, request: RbacRequest) -> RbacResponse:
        """Role names for a raw userId in searchValue, UserRole entities for a User."""
        if request.search_value:
            return RbacResponse(values=self._review(request).assigned_role_names(request.search_value))
        user = expect_entity(request, User)
        return RbacResponse(entities=self._review(request).assigned_roles(user))

    @rbac_operation
    def authorized_users(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entities=self._review(request).authorized_users(role))

    @rbac_operation
    def authorized_roles(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(value_set=self._review(request).authorized_roles(user))

    # ─────────────────────────────────────────────────────────────────────
    # Permission assignments
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def permission_roles(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(values=self._review(request).permission_roles(permission))

    @rbac_operation
    def authorized_permission_roles(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(value_set=self._review(request).authorized_permission_roles(permission))

    @rbac_operation
    def permission_users(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(values=self._review(request).permission_users(permission))

    @rbac_operation
    def authorized_permission_users(self, request: RbacRequest) -> RbacResponse:
        permission = expect_entity(request, Permission)
        return RbacResponse(value_set=self._review(request).authorized_permission_users(permission))

    @rbac_operation
    def user_permissions(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(entities=self._review(request).user_permissions(user))

    @rbac_operation
    def role_permissions(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entities=self._review(request).role_permissions(role))

    # ─────────────────────────────────────────────────────────────────────
    # Static separation of duty
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def ssd_role_sets(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entities=self._review(request).ssd_role_sets(role))

    @rbac_operation
    def ssd_role_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._review(request).ssd_role_set(sd_set))

    @rbac_operation
    def ssd_role_set_roles(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(value_set=self._review(request).ssd_role_set_roles(sd_set))

    @rbac_operation
    def ssd_role_set_cardinality(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        cardinality = self._review(request).ssd_role_set_cardinality(sd_set)
        return RbacResponse(entity=replace(sd_set, cardinality=cardinality))

    @rbac_operation
    def ssd_sets(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entities=self._review(request).ssd_sets(sd_set))

    # ─────────────────────────────────────────────────────────────────────
    # Dynamic separation of duty
    # ─────────────────────────────────────────────────────────────────────
    @rbac_operation
    def dsd_role_sets(self, request: RbacRequest) -> RbacResponse:
        role = expect_entity(request, Role)
        return RbacResponse(entities=self._review(request).dsd_role_sets(role))

    @rbac_operation
    def dsd_role_set(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entity=self._review(request).dsd_role_set(sd_set))

    @rbac_operation
    def dsd_role_set_roles(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(value_set=self._review(request).dsd_role_set_roles(sd_set))

    @rbac_operation
    def dsd_role_set_cardinality(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        cardinality = self._review(request).dsd_role_set_cardinality(sd_set)
        return RbacResponse(entity=replace(sd_set, cardinality=cardinality))

    @rbac_operation
    def dsd_sets(self, request: RbacRequest) -> RbacResponse:
        sd_set = expect_entity(request, SDSet)
        return RbacResponse(entities=self._review(request).dsd_sets(sd_set))

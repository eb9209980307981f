"""Access dispatcher: authentication, sessions and runtime access checks."""
from __future__ import annotations
from dataclasses import replace

from .authority import AccessManager, AuthorityFactory
from .dispatch import expect_entity, rbac_operation
from .envelope import RbacRequest, RbacResponse
from .models import Permission, User, UserRole
from .session_context import require_session


class AccessDispatcher:
    """Maps access requests onto the access authority.

    Every operation except ``authenticate`` and the session creators needs a
    session in the request and echoes it (possibly refreshed) in the response.
    """

    def __init__(self, factory: AuthorityFactory):
        self.factory = factory

    def _access(self, request: RbacRequest) -> AccessManager:
        return self.factory.access_manager(request.context_id)

    @rbac_operation
    def authenticate(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        session = self._access(request).authenticate(user.user_id, user.password)
        return RbacResponse(session=session)

    @rbac_operation
    def create_session(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(session=self._access(request).create_session(user, trusted=False))

    @rbac_operation
    def create_session_trusted(self, request: RbacRequest) -> RbacResponse:
        user = expect_entity(request, User)
        return RbacResponse(session=self._access(request).create_session(user, trusted=True))

    @rbac_operation
    def check_access(self, request: RbacRequest) -> RbacResponse:
        """Evaluate a permission in the regular (non-administrative) space."""
        session = require_session(request)
        permission = replace(expect_entity(request, Permission), admin=False)
        authorized = self._access(request).check_access(session, permission)
        return RbacResponse(authorized=authorized, session=session)

    @rbac_operation
    def session_permissions(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        return RbacResponse(entities=self._access(request).session_permissions(session), session=session)

    @rbac_operation
    def session_roles(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        return RbacResponse(entities=self._access(request).session_roles(session), session=session)

    @rbac_operation
    def authorized_session_roles(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        return RbacResponse(value_set=self._access(request).authorized_roles(session), session=session)

    @rbac_operation
    def add_active_role(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        user_role = expect_entity(request, UserRole)
        refreshed = self._access(request).add_active_role(session, user_role)
        return RbacResponse(session=refreshed or session)

    @rbac_operation
    def drop_active_role(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        user_role = expect_entity(request, UserRole)
        refreshed = self._access(request).drop_active_role(session, user_role)
        return RbacResponse(session=refreshed or session)

    @rbac_operation
    def get_user_id(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        user_id = self._access(request).get_user_id(session)
        return RbacResponse(entity=User(user_id=user_id), session=session)

    @rbac_operation
    def get_user(self, request: RbacRequest) -> RbacResponse:
        session = require_session(request)
        return RbacResponse(entity=self._access(request).get_user(session), session=session)

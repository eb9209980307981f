"""Access authority handle: authentication, sessions and access checks."""
from __future__ import annotations
from typing import List, Optional, Set

from ..models import Permission, Session, User, UserRole
from .base import AuthorityManager, decode_bool, decode_entity, decode_list, decode_name_set, decode_str


class AccessManager(AuthorityManager):
    """Runtime access decisions against an established session.

    The session is always passed explicitly; it is the subject of the
    operation, not the acting administrator.
    """

    manager_path = "accessMgr"

    def authenticate(self, user_id: str, password: str) -> Session:
        """Verify credentials and return a session without activating roles."""
        return decode_entity(Session, self._call("authenticate", userId=user_id, password=password), required=True)

    def create_session(self, user: User, trusted: bool) -> Session:
        """Open a session; ``trusted`` skips the password check."""
        return decode_entity(Session, self._call("createSession", user=user, isTrusted=trusted), required=True)

    def check_access(self, session: Session, permission: Permission) -> bool:
        return decode_bool(self._call("checkAccess", session=session, permission=permission))

    def session_permissions(self, session: Session) -> List[Permission]:
        return decode_list(Permission, self._call("sessionPermissions", session=session))

    def session_roles(self, session: Session) -> List[UserRole]:
        return decode_list(UserRole, self._call("sessionRoles", session=session))

    def authorized_roles(self, session: Session) -> Set[str]:
        return decode_name_set(self._call("authorizedRoles", session=session))

    def add_active_role(self, session: Session, user_role: UserRole) -> Optional[Session]:
        """Activate a role; returns the session as refreshed by the engine."""
        return decode_entity(Session, self._call("addActiveRole", session=session, userRole=user_role))

    def drop_active_role(self, session: Session, user_role: UserRole) -> Optional[Session]:
        return decode_entity(Session, self._call("dropActiveRole", session=session, userRole=user_role))

    def get_user_id(self, session: Session) -> str:
        return decode_str(self._call("getUserId", session=session))

    def get_user(self, session: Session) -> User:
        return decode_entity(User, self._call("getUser", session=session))

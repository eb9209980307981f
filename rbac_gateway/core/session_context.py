"""Acting-session helpers shared by the dispatchers."""
from __future__ import annotations
from typing import TypeVar

from .envelope import RbacRequest
from .errors import SessionRequired
from .models import Session

M = TypeVar("M")


def attach_session(manager: M, request: RbacRequest) -> M:
    """Attach the request's session to an authority handle as acting identity.

    The handle is returned so callers can chain:
        self._admin(request).add_user(user)
    """
    manager.set_admin(request.session)
    return manager


def require_session(request: RbacRequest) -> Session:
    """Return the request session or fail with SESSION_REQUIRED."""
    if request.session is None:
        raise SessionRequired()
    return request.session

"""Core RBAC dispatch logic.

This module provides the dispatch layer between the generic request/response
envelopes and the authority engine, independent of HTTP frameworks.

Architecture:
    - Pure Python (no Flask dependencies)
    - Authority handles are built per call by AuthorityFactory
    - Every dispatcher operation returns an RbacResponse, never raises
      AuthorityFailure

Module Structure:
    - authority/        : Authority engine HTTP client and manager handles
    - models.py         : RBAC entities and their wire form
    - envelope.py       : RbacRequest / RbacResponse
    - errors.py         : AuthorityFailure and gateway error codes
    - dispatch.py       : Operation wrapper and entity checks
    - session_context.py: Acting-session helpers
    - access.py         : AccessDispatcher
    - admin.py          : AdminDispatcher
    - review.py         : ReviewDispatcher
"""
from .access import AccessDispatcher
from .admin import AdminDispatcher
from .review import ReviewDispatcher
from .envelope import RbacRequest, RbacResponse
from .errors import AuthorityFailure

__all__ = [
    "AccessDispatcher",
    "AdminDispatcher",
    "ReviewDispatcher",
    "RbacRequest",
    "RbacResponse",
    "AuthorityFailure",
]

"""RBAC authority engine client library.

This package provides a modular, testable interface to the authority engine.

Architecture:
- client.py: HTTP transport and result envelope decoding
- base.py: Shared manager handle plumbing (context id, acting session)
- admin.py: Regular and delegated administration
- review.py: Read-only queries
- access.py: Authentication, sessions and access checks
- factory.py: Per-request handle construction

Usage:
    from rbac_gateway.core.authority import AuthorityClient, AuthorityFactory

    factory = AuthorityFactory(AuthorityClient("http://fortress:8081/fortress-rest"))
    admin = factory.admin_manager("HOME")
    admin.set_admin(session)
    admin.add_role(Role("auditor"))
"""
from .client import AuthorityClient, REQUEST_TIMEOUT
from .base import AuthorityManager
from .admin import AdminManager, DelegatedAdminManager
from .review import ReviewManager
from .access import AccessManager
from .factory import AuthorityFactory, DEFAULT_CONTEXT_ID

__all__ = [
    # Client
    "AuthorityClient",
    "REQUEST_TIMEOUT",

    # Managers
    "AuthorityManager",
    "AdminManager",
    "DelegatedAdminManager",
    "ReviewManager",
    "AccessManager",

    # Factory
    "AuthorityFactory",
    "DEFAULT_CONTEXT_ID",
]

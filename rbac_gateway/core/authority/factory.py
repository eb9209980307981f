"""Factory producing fresh authority handles per request."""
from __future__ import annotations
from typing import Optional

from .access import AccessManager
from .admin import AdminManager, DelegatedAdminManager
from .client import AuthorityClient
from .review import ReviewManager

DEFAULT_CONTEXT_ID = "HOME"


class AuthorityFactory:
    """Builds manager handles scoped to a tenant.

    Each call returns a new handle so no acting session leaks between
    requests. The underlying client holds configuration only.

    Usage:
        factory = AuthorityFactory.from_config(cfg)
        review = factory.review_manager("HOME")
        review.set_admin(session)
        user = review.read_user(User("alice"))
    """

    def __init__(self, client: AuthorityClient, default_context_id: str = DEFAULT_CONTEXT_ID):
        self.client = client
        self.default_context_id = default_context_id

    @classmethod
    def from_config(cls, cfg) -> "AuthorityFactory":
        """Build a factory from an AppConfig."""
        client = AuthorityClient(
            cfg.authority_url,
            timeout=cfg.authority_timeout,
            username=cfg.authority_username or None,
            password=cfg.authority_password or None,
        )
        return cls(client, default_context_id=cfg.default_context_id)

    def _context(self, context_id: Optional[str]) -> str:
        return context_id or self.default_context_id

    def admin_manager(self, context_id: Optional[str] = None) -> AdminManager:
        return AdminManager(self.client, self._context(context_id))

    def delegated_admin_manager(self, context_id: Optional[str] = None) -> DelegatedAdminManager:
        return DelegatedAdminManager(self.client, self._context(context_id))

    def review_manager(self, context_id: Optional[str] = None) -> ReviewManager:
        return ReviewManager(self.client, self._context(context_id))

    def access_manager(self, context_id: Optional[str] = None) -> AccessManager:
        return AccessManager(self.client, self._context(context_id))

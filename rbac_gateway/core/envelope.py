"""Generic request and response envelopes shared by every operation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Set

from .errors import AuthorityFailure
from .models import Session, to_wire


@dataclass
class RbacRequest:
    """Inbound envelope.

    Attributes:
        context_id: Tenant identifier; ``None`` means the configured default
        entity: Operation specific entity (User, Role, PermGrant, ...)
        session: Acting session, attached to every authority handle
        search_value: Raw string argument (role member name, search filter)
        limit: Result cap; its presence switches searches to name lists
    """
    context_id: Optional[str] = None
    entity: Any = None
    session: Optional[Session] = None
    search_value: Optional[str] = None
    limit: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], entity_type: Optional[type] = None) -> "RbacRequest":
        """Decode a wire envelope, typing ``entity`` with ``entity_type``.

        Without an ``entity_type`` the entity is kept as the raw mapping.

        Raises:
            ValueError: If ``limit`` is not an integer
        """
        entity = data.get("entity")
        if entity_type is not None and isinstance(entity, dict):
            entity = entity_type.from_dict(entity)

        limit = data.get("limit")
        if limit is not None:
            limit = int(limit)

        return cls(
            context_id=data.get("contextId") or None,
            entity=entity,
            session=Session.from_dict(data.get("session")),
            search_value=data.get("searchValue"),
            limit=limit,
        )


@dataclass
class RbacResponse:
    """Outbound envelope.

    ``error_code`` is 0 exactly when the operation succeeded. A successful
    response populates at most one of entity, entities, values or value_set.
    """
    entity: Any = None
    entities: Optional[List[Any]] = None
    values: Optional[List[str]] = None
    value_set: Optional[Set[str]] = None
    session: Optional[Session] = None
    authorized: Optional[bool] = None
    error_code: int = 0
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_code == 0

    @classmethod
    def failure(cls, exc: AuthorityFailure) -> "RbacResponse":
        """Build an error response carrying only the failure code and message."""
        return cls(error_code=exc.code, error_message=exc.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"errorCode": self.error_code}
        if self.error_message is not None:
            payload["errorMessage"] = self.error_message
        for key, value in (
            ("entity", self.entity),
            ("entities", self.entities),
            ("values", self.values),
            ("valueSet", self.value_set),
            ("session", self.session),
            ("authorized", self.authorized),
        ):
            if value is not None:
                payload[key] = to_wire(value)
        return payload

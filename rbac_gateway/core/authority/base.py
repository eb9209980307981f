"""Shared plumbing for authority manager handles."""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Set

from ..errors import EngineProtocolError
from ..models import Session, to_wire
from .client import AuthorityClient


class AuthorityManager:
    """Base class for a per-call handle on one authority manager.

    A handle is bound to a tenant (``context_id``) and, once ``set_admin`` is
    called, to the acting session. Handles are cheap and never shared between
    requests.
    """

    # Path segment of the manager on the engine (e.g. "adminMgr")
    manager_path = ""

    def __init__(self, client: AuthorityClient, context_id: str):
        """Initialize manager handle.

        Args:
            client: Authority engine client
            context_id: Tenant the handle operates on
        """
        self.client = client
        self.context_id = context_id
        self.session: Optional[Session] = None

    def set_admin(self, session: Optional[Session]) -> None:
        """Attach the acting identity used for authorization and audit."""
        self.session = session

    def _call(self, operation: str, **arguments: Any) -> Any:
        payload: Dict[str, Any] = {
            "contextId": self.context_id,
            "session": to_wire(self.session),
        }
        for name, value in arguments.items():
            payload[name] = to_wire(value)
        return self.client.call(f"{self.manager_path}/{operation}", payload)


def _protocol_error(operation_result, expected: str) -> EngineProtocolError:
    return EngineProtocolError(f"Expected {expected} result from authority engine, got {type(operation_result).__name__}")


def decode_entity(entity_type, result, required: bool = False):
    """Decode a single-entity result; ``None`` stays ``None`` unless ``required``.

    Raises:
        EngineProtocolError: If the result is not an object of the entity's shape
    """
    if result is None and not required:
        return None
    if not isinstance(result, dict):
        raise _protocol_error(result, entity_type.__name__)
    try:
        return entity_type.from_dict(result)
    except (TypeError, ValueError, AttributeError) as exc:
        raise EngineProtocolError(f"Malformed {entity_type.__name__} from authority engine: {exc}") from exc


def decode_list(entity_type, result) -> List[Any]:
    """Decode a list result into entities of ``entity_type``."""
    return [decode_entity(entity_type, item) for item in _as_list(result, f"{entity_type.__name__} list")]


def decode_names(result) -> List[str]:
    return [str(item) for item in _as_list(result, "name list")]


def decode_name_set(result) -> Set[str]:
    return {str(item) for item in _as_list(result, "name set")}


def decode_int(result) -> int:
    """Decode a numeric result; booleans and missing values are rejected."""
    if isinstance(result, bool) or result is None:
        raise _protocol_error(result, "integer")
    try:
        return int(result)
    except (TypeError, ValueError) as exc:
        raise EngineProtocolError(f"Expected integer result from authority engine, got {result!r}") from exc


def decode_bool(result) -> bool:
    if not isinstance(result, bool):
        raise _protocol_error(result, "boolean")
    return result


def decode_str(result) -> str:
    if not isinstance(result, str) or not result:
        raise _protocol_error(result, "non-empty string")
    return result


def _as_list(result, expected: str) -> List[Any]:
    # the engine sends null for an empty collection
    if result is None:
        return []
    if not isinstance(result, list):
        raise _protocol_error(result, expected)
    return result

"""Operation wrapper turning authority failures into error responses."""
from __future__ import annotations
import logging
from functools import wraps

from .envelope import RbacRequest, RbacResponse
from .errors import AuthorityFailure, InvalidEntity


def rbac_operation(fn):
    """Decorator for dispatcher operations.

    Any AuthorityFailure raised while the operation runs (engine rejection,
    transport failure, request validation) is logged and returned as an
    error response with no payload. Other exceptions propagate.

    Example:
        class AdminDispatcher:
            @rbac_operation
            def add_role(self, request):
                ...
    """
    logger = logging.getLogger(fn.__module__)

    @wraps(fn)
    def wrapper(self, request: RbacRequest) -> RbacResponse:
        try:
            return fn(self, request)
        except AuthorityFailure as exc:
            logger.info("%s.%s caught %s", type(self).__name__, fn.__name__, exc)
            return RbacResponse.failure(exc)

    wrapper.rbac_operation = True
    return wrapper


def expect_entity(request: RbacRequest, entity_type: type):
    """Return ``request.entity`` if it is an ``entity_type``, else fail."""
    entity = request.entity
    if not isinstance(entity, entity_type):
        got = type(entity).__name__ if entity is not None else "nothing"
        raise InvalidEntity(f"Expected {entity_type.__name__} entity, got {got}")
    return entity

"""RBAC operation endpoints.

Every operation is ``POST /rbac/<operation>`` with a JSON request envelope:

    {"contextId": "HOME", "session": {...}, "entity": {...},
     "searchValue": "...", "limit": 10}

and answers HTTP 200 with a response envelope, including when the authority
rejected the operation (``errorCode`` != 0). Transport-level problems
(unknown operation, malformed body, missing credentials) use HTTP status
codes with an error envelope.
"""

from __future__ import annotations
import logging
from flask import Blueprint, request, jsonify, current_app, g

from rbac_gateway.api.decorators import require_api_token
from rbac_gateway.api.errors import envelope_error
from rbac_gateway.api.operations import OPERATIONS
from rbac_gateway.core.envelope import RbacRequest
from rbac_gateway.core.errors import MALFORMED_REQUEST, UNKNOWN_OPERATION

bp = Blueprint("rbac", __name__)

JSON_MAX_SIZE_BYTES = 65536  # 64 KB

logger = logging.getLogger(__name__)


@bp.after_request
def propagate_correlation_id(response):
    """Echo the caller's X-Correlation-Id on every response."""
    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        response.headers["X-Correlation-Id"] = correlation_id
    return response


@bp.route("/operations", methods=["GET"])
@require_api_token
def list_operations():
    """List supported wire operation names grouped by dispatcher."""
    grouped: dict[str, list[str]] = {}
    for name, op in OPERATIONS.items():
        grouped.setdefault(op.dispatcher, []).append(name)
    return jsonify({group: sorted(names) for group, names in grouped.items()}), 200


@bp.route("/<operation>", methods=["POST"])
@require_api_token
def dispatch(operation: str):
    """Decode the envelope, run the operation and encode the result."""
    op = OPERATIONS.get(operation)
    if op is None:
        return envelope_error(404, UNKNOWN_OPERATION, f"Unknown operation '{operation}'")

    if request.content_length and request.content_length > JSON_MAX_SIZE_BYTES:
        return envelope_error(413, MALFORMED_REQUEST, "Request payload exceeds maximum allowed size (64 KB)")

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return envelope_error(400, MALFORMED_REQUEST, "Request body must be a JSON object")

    try:
        rbac_request = RbacRequest.from_dict(data, op.entity_type)
    except (TypeError, ValueError, AttributeError) as e:
        return envelope_error(400, MALFORMED_REQUEST, f"Malformed request envelope: {e}")

    cfg = current_app.config["APP_CONFIG"]
    if rbac_request.context_id is None:
        rbac_request.context_id = cfg.default_context_id

    dispatcher = current_app.extensions["rbac"][op.dispatcher]
    response = getattr(dispatcher, op.method)(rbac_request)

    logger.info(
        f"RBAC op={operation} context={rbac_request.context_id} errorCode={response.error_code} "
        f"caller={g.get('caller_id')} correlation_id={request.headers.get('X-Correlation-Id', 'none')}"
    )
    return jsonify(response.to_dict()), 200

"""
Flask decorators for caller authentication.

Callers of the RBAC API present ``Authorization: Bearer <token>``. The token
is accepted when it matches the configured static API token, or, when an
OIDC issuer is configured, when it is a valid RS256 JWT from that issuer.

Security:
- Constant-time comparison of the static token
- RSA-SHA256 signature verification via JWKS (RFC 7517)
- Expiration, issuer and (optional) audience validation (RFC 7519)
- Tokens are only logged as truncated SHA-256 hashes
"""

import hashlib
import hmac
import logging
from functools import wraps
from typing import Dict, Any

import jwt
from jwt import PyJWKClient
from jwt.exceptions import (
    ExpiredSignatureError,
    InvalidIssuerError,
    InvalidAudienceError,
    InvalidSignatureError,
    DecodeError,
    PyJWTError,
)
from flask import request, current_app, g

from rbac_gateway.api.errors import envelope_error
from rbac_gateway.core.errors import UNAUTHORIZED

logger = logging.getLogger(__name__)

# app.extensions key of the per-app JWKS client
JWKS_EXTENSION = "rbac_jwks_client"


class TokenValidationError(Exception):
    """Exception raised when JWT token validation fails."""
    pass


def get_jwks_client() -> PyJWKClient:
    """
    Get the JWKS client cached on the current app.

    Each app keeps its own client so apps built with different issuers never
    share signing keys.

    Returns:
        PyJWKClient: Client for the configured issuer's key set

    Security:
        - Caches up to 16 keys
        - Refreshes cache every 1 hour
        - Uses kid (Key ID) from JWT header to select correct key
    """
    jwks_client = current_app.extensions.get(JWKS_EXTENSION)

    if jwks_client is None:
        cfg = current_app.config["APP_CONFIG"]
        jwks_url = cfg.jwks_url_resolved

        logger.info(f"Initializing JWKS client for: {jwks_url}")

        jwks_client = PyJWKClient(
            jwks_url,
            cache_keys=True,
            max_cached_keys=16,
            lifespan=3600,
            headers={"User-Agent": "RBAC-Gateway/1.0"},
        )
        current_app.extensions[JWKS_EXTENSION] = jwks_client

    return jwks_client


def validate_jwt_token(token: str) -> Dict[str, Any]:
    """
    Validate JWT Bearer token with full security checks.

    Validations performed:
    1. Signature verification (RSA-SHA256 via JWKS)
    2. Expiration (exp claim)
    3. Not Before (nbf claim)
    4. Issuer (iss claim)
    5. Audience (aud claim, if configured)

    Args:
        token: JWT token string (without "Bearer " prefix)

    Returns:
        dict: Validated token claims

    Raises:
        TokenValidationError: If any validation fails
    """
    cfg = current_app.config["APP_CONFIG"]

    try:
        signing_key = get_jwks_client().get_signing_key_from_jwt(token)

        claims = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            issuer=cfg.oidc_issuer,
            audience=cfg.oidc_audience or None,
            options={
                "verify_signature": True,
                "verify_exp": True,
                "verify_nbf": True,
                "verify_iss": True,
                "verify_aud": bool(cfg.oidc_audience),
                "require": ["exp", "iat"],
            },
            leeway=5,  # clock skew between services
        )

        logger.debug(f"JWT validated for client: {claims.get('azp') or claims.get('client_id', 'unknown')}")
        return claims

    except ExpiredSignatureError:
        raise TokenValidationError("Token expired (exp claim)")
    except InvalidIssuerError as e:
        raise TokenValidationError(f"Invalid issuer: {e}")
    except InvalidAudienceError as e:
        raise TokenValidationError(f"Invalid audience (token not for this API): {e}")
    except InvalidSignatureError:
        raise TokenValidationError("Invalid signature (token tampered or wrong key)")
    except DecodeError as e:
        raise TokenValidationError(f"Token decode error (malformed JWT): {e}")
    except PyJWTError as e:
        logger.error(f"JWT validation failed: {e}")
        raise TokenValidationError(f"Token validation failed: {e}")


def _matches_static_token(provided_token: str) -> bool:
    """Compare against the configured static token in constant time."""
    cfg = current_app.config["APP_CONFIG"]
    if not cfg.api_static_token:
        return False
    return hmac.compare_digest(provided_token.encode(), cfg.api_static_token.encode())


def _log_auth_attempt(auth_method: str, token: str, success: bool) -> None:
    """Log authentication attempt without leaking the token."""
    token_hash = hashlib.sha256(token.encode()).hexdigest()[:12]
    correlation_id = request.headers.get("X-Correlation-Id", "none")
    status = "SUCCESS" if success else "FAILED"
    logger.info(
        f"{status} RBAC auth | method={auth_method} | token_hash={token_hash} | "
        f"path={request.path} | correlation_id={correlation_id}"
    )


def require_api_token(fn):
    """
    Decorator requiring a valid caller bearer token.

    Precedence:
    1. Token equal to the static API token -> accepted
    2. Otherwise, if an OIDC issuer is configured -> validated as JWT
    3. Otherwise -> 401

    On success ``g.auth_method`` and ``g.caller_id`` describe the caller.

    Example:
        @bp.route("/<operation>", methods=["POST"])
        @require_api_token
        def dispatch(operation):
            ...
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith("Bearer "):
            logger.warning("RBAC request without Bearer authorization")
            return envelope_error(401, UNAUTHORIZED, "Authorization header required. Use 'Authorization: Bearer <token>'")

        token = auth_header[7:].strip()
        if not token:
            return envelope_error(401, UNAUTHORIZED, "Bearer token is empty")

        if _matches_static_token(token):
            _log_auth_attempt("static", token, success=True)
            g.auth_method = "static"
            g.caller_id = "static-token"
            return fn(*args, **kwargs)

        cfg = current_app.config["APP_CONFIG"]
        if not cfg.jwt_enabled:
            _log_auth_attempt("static", token, success=False)
            return envelope_error(401, UNAUTHORIZED, "Invalid bearer token")

        try:
            claims = validate_jwt_token(token)
        except TokenValidationError as e:
            _log_auth_attempt("oauth", token, success=False)
            return envelope_error(401, UNAUTHORIZED, str(e))

        _log_auth_attempt("oauth", token, success=True)
        g.auth_method = "oauth"
        g.oauth_claims = claims
        g.caller_id = claims.get("azp") or claims.get("client_id") or claims.get("sub")
        return fn(*args, **kwargs)

    return wrapper

"""Failure types raised by the authority engine and the gateway itself.

Every failure is an ``AuthorityFailure`` carrying a numeric code and a
message. Codes sent by the engine pass through untouched; failures that
originate in the gateway use the reserved 9000 range below.
"""

ENGINE_UNAVAILABLE = 9001
ENGINE_HTTP_ERROR = 9002
ENGINE_PROTOCOL_ERROR = 9003
INVALID_ENTITY = 9010
INVALID_GRANT_TARGET = 9011
SESSION_REQUIRED = 9012
MALFORMED_REQUEST = 9020
UNKNOWN_OPERATION = 9021
UNAUTHORIZED = 9030
INTERNAL_ERROR = 9099


class AuthorityFailure(Exception):
    """Rule violation or failure reported by the authority engine.

    Attributes:
        code: Numeric error code (engine code or gateway code)
        message: Human-readable description
    """

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class EngineUnavailable(AuthorityFailure):
    """Authority engine could not be reached (connection error, timeout)."""

    def __init__(self, message: str):
        super().__init__(ENGINE_UNAVAILABLE, message)


class EngineHttpError(AuthorityFailure):
    """HTTP error from the authority engine without a decodable envelope.

    Attributes:
        status_code: HTTP status code
        endpoint: URL that failed
    """

    def __init__(self, status_code: int, message: str, endpoint: str):
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(ENGINE_HTTP_ERROR, f"HTTP {status_code} from {endpoint}: {message}")


class EngineProtocolError(AuthorityFailure):
    """Authority engine answered with something that is not a result envelope."""

    def __init__(self, message: str):
        super().__init__(ENGINE_PROTOCOL_ERROR, message)


class InvalidEntity(AuthorityFailure):
    """Request entity missing or of the wrong type for the operation."""

    def __init__(self, message: str):
        super().__init__(INVALID_ENTITY, message)


class InvalidGrantTarget(AuthorityFailure):
    """Permission grant names both a role and a user, or neither."""

    def __init__(self, message: str):
        super().__init__(INVALID_GRANT_TARGET, message)


class SessionRequired(AuthorityFailure):
    """Access operation called without a session in the request."""

    def __init__(self, message: str = "Operation requires a session"):
        super().__init__(SESSION_REQUIRED, message)

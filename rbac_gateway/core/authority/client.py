"""Low-level HTTP client for the RBAC authority engine.

Handles transport, basic authentication and decoding of the engine's
result envelope. Domain operations live in the manager classes.
"""
from __future__ import annotations
import logging
from typing import Optional, Dict, Any

import requests

from ..errors import AuthorityFailure, EngineHttpError, EngineProtocolError, EngineUnavailable

REQUEST_TIMEOUT = 5

logger = logging.getLogger(__name__)


class AuthorityClient:
    """HTTP client for the authority engine REST endpoint.

    Every operation is a JSON POST to ``{base_url}/{manager}/{operation}``.
    The engine answers with ``{"errorCode": int, "errorMessage": str,
    "result": ...}``; a non-zero errorCode is raised as AuthorityFailure.

    Usage:
        client = AuthorityClient("http://fortress:8081/fortress-rest")
        result = client.call("reviewMgr/readUser", {"contextId": "HOME", "user": {"userId": "alice"}})
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = REQUEST_TIMEOUT,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ):
        """Initialize authority client.

        Args:
            base_url: Authority engine base URL
            timeout: Per-request timeout in seconds
            username: Optional HTTP basic auth user
            password: Optional HTTP basic auth password
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._auth = (username, password or "") if username else None

    def call(self, path: str, payload: Dict[str, Any]) -> Any:
        """POST an operation to the engine and return its decoded result.

        Args:
            path: Operation path (e.g., "adminMgr/addUser")
            payload: JSON body (contextId, session and operation arguments)

        Returns:
            The ``result`` member of the engine envelope (may be None)

        Raises:
            AuthorityFailure: Engine rejected the operation
            EngineUnavailable: Connection error or timeout
            EngineHttpError: HTTP error without a result envelope
            EngineProtocolError: Body is not a result envelope
        """
        url = f"{self.base_url}/{path}"
        try:
            resp = requests.post(url, json=payload, auth=self._auth, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Authority engine unreachable at %s: %s", url, exc)
            raise EngineUnavailable(f"{url}: {exc}") from exc
        return self._handle_response(resp)

    def ping(self) -> bool:
        """Return True when the engine health endpoint answers without error."""
        try:
            resp = requests.get(f"{self.base_url}/health", auth=self._auth, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Authority engine health check failed: %s", exc)
            return False
        return resp.status_code < 400

    def _handle_response(self, resp: requests.Response) -> Any:
        """Centralized decoding of engine responses.

        Args:
            resp: Response object to decode

        Raises:
            AuthorityFailure: If the envelope carries a non-zero errorCode
            EngineHttpError: If status indicates error and no envelope was sent
            EngineProtocolError: If a successful response is not an envelope
        """
        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if resp.status_code >= 400:
                raise EngineHttpError(resp.status_code, resp.text, resp.url)
            raise EngineProtocolError(f"Unexpected response from {resp.url}: {resp.text[:200]}")

        raw_code = body.get("errorCode") or 0
        if isinstance(raw_code, bool):
            raise EngineProtocolError(f"Non-numeric errorCode {raw_code!r} from {resp.url}")
        try:
            error_code = int(raw_code)
        except (TypeError, ValueError):
            raise EngineProtocolError(f"Non-numeric errorCode {raw_code!r} from {resp.url}")
        if error_code:
            message = body.get("errorMessage") or f"Authority engine error {error_code}"
            raise AuthorityFailure(error_code, str(message))

        if resp.status_code >= 400:
            raise EngineHttpError(resp.status_code, resp.text, resp.url)

        return body.get("result")

"""Tests for the authority engine HTTP client."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from rbac_gateway.core.authority import client as client_module
from rbac_gateway.core.authority.client import AuthorityClient
from rbac_gateway.core.errors import (
    AuthorityFailure,
    EngineHttpError,
    EngineProtocolError,
    EngineUnavailable,
    ENGINE_HTTP_ERROR,
    ENGINE_PROTOCOL_ERROR,
    ENGINE_UNAVAILABLE,
)


class _StubResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str = None, url: str = "http://authority.test/x"):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)
        self.url = url

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


@pytest.fixture()
def captured_post(monkeypatch):
    calls = []
    responses = []

    def _post(url, json=None, auth=None, timeout=None):
        calls.append({"url": url, "json": json, "auth": auth, "timeout": timeout})
        return responses.pop(0)

    monkeypatch.setattr(client_module.requests, "post", _post)
    return calls, responses


def test_call_posts_json_and_returns_result(captured_post):
    calls, responses = captured_post
    responses.append(_StubResponse({"errorCode": 0, "result": {"userId": "alice"}}))

    client = AuthorityClient("http://authority.test/fortress-rest/", timeout=3)
    result = client.call("reviewMgr/readUser", {"contextId": "HOME"})

    assert result == {"userId": "alice"}
    assert calls[0]["url"] == "http://authority.test/fortress-rest/reviewMgr/readUser"
    assert calls[0]["json"] == {"contextId": "HOME"}
    assert calls[0]["timeout"] == 3
    assert calls[0]["auth"] is None


def test_call_uses_basic_auth_when_configured(captured_post):
    calls, responses = captured_post
    responses.append(_StubResponse({"errorCode": 0}))

    AuthorityClient("http://authority.test", username="gw", password="pw").call("adminMgr/addRole", {})

    assert calls[0]["auth"] == ("gw", "pw")


def test_engine_error_code_is_raised_verbatim(captured_post):
    _, responses = captured_post
    responses.append(_StubResponse({"errorCode": 1007, "errorMessage": "role not found"}))

    with pytest.raises(AuthorityFailure) as exc:
        AuthorityClient("http://authority.test").call("reviewMgr/readRole", {})

    assert exc.value.code == 1007
    assert exc.value.message == "role not found"


def test_engine_error_envelope_on_http_error_keeps_engine_code(captured_post):
    _, responses = captured_post
    responses.append(_StubResponse({"errorCode": 2005, "errorMessage": "ssd violation"}, status_code=409))

    with pytest.raises(AuthorityFailure) as exc:
        AuthorityClient("http://authority.test").call("adminMgr/assignUser", {})

    assert exc.value.code == 2005


def test_http_error_without_envelope(captured_post):
    _, responses = captured_post
    responses.append(_StubResponse(None, status_code=502, text="Bad Gateway"))

    with pytest.raises(EngineHttpError) as exc:
        AuthorityClient("http://authority.test").call("adminMgr/addUser", {})

    assert exc.value.code == ENGINE_HTTP_ERROR
    assert exc.value.status_code == 502


def test_non_json_success_is_protocol_error(captured_post):
    _, responses = captured_post
    responses.append(_StubResponse(None, status_code=200, text="<html>"))

    with pytest.raises(EngineProtocolError) as exc:
        AuthorityClient("http://authority.test").call("adminMgr/addUser", {})

    assert exc.value.code == ENGINE_PROTOCOL_ERROR


def test_connection_error_is_engine_unavailable(monkeypatch):
    def _post(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(client_module.requests, "post", _post)

    with pytest.raises(EngineUnavailable) as exc:
        AuthorityClient("http://authority.test").call("adminMgr/addUser", {})

    assert exc.value.code == ENGINE_UNAVAILABLE
    assert "connection refused" in exc.value.message


def test_ping_reports_health(monkeypatch):
    monkeypatch.setattr(client_module.requests, "get", MagicMock(return_value=MagicMock(status_code=200)))
    assert AuthorityClient("http://authority.test").ping() is True

    monkeypatch.setattr(client_module.requests, "get", MagicMock(return_value=MagicMock(status_code=503)))
    assert AuthorityClient("http://authority.test").ping() is False


def test_ping_false_when_unreachable(monkeypatch):
    monkeypatch.setattr(client_module.requests, "get", MagicMock(side_effect=requests.Timeout("slow")))
    assert AuthorityClient("http://authority.test").ping() is False


@pytest.mark.parametrize("raw_code", ["E42", [1], True])
def test_non_numeric_error_code_is_protocol_error(captured_post, raw_code):
    _, responses = captured_post
    responses.append(_StubResponse({"errorCode": raw_code, "errorMessage": "bad"}))

    with pytest.raises(EngineProtocolError) as exc:
        AuthorityClient("http://authority.test").call("reviewMgr/readRole", {})

    assert exc.value.code == ENGINE_PROTOCOL_ERROR
    assert repr(raw_code) in exc.value.message


def test_numeric_string_error_code_is_accepted(captured_post):
    _, responses = captured_post
    responses.append(_StubResponse({"errorCode": "1007", "errorMessage": "role not found"}))

    with pytest.raises(AuthorityFailure) as exc:
        AuthorityClient("http://authority.test").call("reviewMgr/readRole", {})

    assert exc.value.code == 1007


def test_engine_error_without_message_gets_default(captured_post):
    _, responses = captured_post
    responses.append(_StubResponse({"errorCode": 5001}))

    with pytest.raises(AuthorityFailure) as exc:
        AuthorityClient("http://authority.test").call("adminMgr/addRole", {})

    assert exc.value.code == 5001
    assert exc.value.message == "Authority engine error 5001"

"""Pytest shared fixtures for the RBAC gateway."""
import os
import pathlib
import sys
import time
from types import SimpleNamespace
from typing import Optional
from unittest.mock import MagicMock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Configure test environment BEFORE any app imports (flask_app builds an app at import)
os.environ.setdefault("DEMO_MODE", "true")

import jwt
import pytest
import requests
from cryptography.hazmat.primitives.asymmetric import rsa

from rbac_gateway.config.settings import AppConfig
from rbac_gateway.core.models import Session
from rbac_gateway.flask_app import create_app

API_TOKEN = "test-api-token"
ISSUER = "https://idp.example.test/realms/demo"


# ─────────────────────────────────────────────────────────────────────────────
# Network Guard Rails
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(autouse=True)
def _block_network(monkeypatch):
    """Fail loudly if a unit test reaches for the network.

    Tests exercising the HTTP client install their own stubs on top.
    """
    def _stub_post(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP POST in unit test: {url}")

    def _stub_get(url, *args, **kwargs):
        raise RuntimeError(f"Unexpected HTTP GET in unit test: {url}")

    monkeypatch.setattr(requests, "post", _stub_post)
    monkeypatch.setattr(requests, "get", _stub_get)


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────
def _make_config(**overrides) -> AppConfig:
    base = dict(
        demo_mode=False,
        authority_url="http://authority.test/fortress-rest",
        authority_timeout=5.0,
        authority_username="",
        authority_password="",
        default_context_id="HOME",
        api_static_token=API_TOKEN,
        oidc_issuer="",
        oidc_jwks_url="",
        oidc_audience="",
        log_level="INFO",
    )
    base.update(overrides)
    return AppConfig(**base)


# ─────────────────────────────────────────────────────────────────────────────
# Authority Doubles
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def managers():
    """One MagicMock per authority manager kind."""
    return SimpleNamespace(
        admin=MagicMock(name="AdminManager"),
        delegated=MagicMock(name="DelegatedAdminManager"),
        review=MagicMock(name="ReviewManager"),
        access=MagicMock(name="AccessManager"),
    )


@pytest.fixture()
def factory(managers):
    """AuthorityFactory double handing out the ``managers`` mocks."""
    fake = MagicMock(name="AuthorityFactory")
    fake.admin_manager.return_value = managers.admin
    fake.delegated_admin_manager.return_value = managers.delegated
    fake.review_manager.return_value = managers.review
    fake.access_manager.return_value = managers.access
    fake.client.ping.return_value = True
    return fake


@pytest.fixture()
def session():
    return Session({"sessionId": "sess-1", "userId": "admin"})


# ─────────────────────────────────────────────────────────────────────────────
# Flask Test Client
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture()
def app(factory):
    flask_app = create_app(cfg=_make_config(), factory=factory)
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {API_TOKEN}"}


# ─────────────────────────────────────────────────────────────────────────────
# RSA Key Pair for JWT Testing
# ─────────────────────────────────────────────────────────────────────────────
@pytest.fixture(scope="session")
def rsa_key_pair():
    """Generate RSA key pair for JWT signing in tests."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return {"private_key": private_key, "public_key": private_key.public_key()}


def _create_jwt(
    rsa_key_pair: dict,
    issuer: str = ISSUER,
    audience: Optional[str] = None,
    sub: str = "automation-cli",
    exp_offset: int = 3600,
) -> str:
    """Create an RS256-signed JWT for testing."""
    now = int(time.time())
    payload = {
        "iss": issuer,
        "sub": sub,
        "azp": sub,
        "exp": now + exp_offset,
        "iat": now,
    }
    if audience:
        payload["aud"] = audience
    return jwt.encode(payload, rsa_key_pair["private_key"], algorithm="RS256", headers={"kid": "test-key"})


@pytest.fixture()
def make_config():
    """Build an AppConfig with test defaults: make_config(demo_mode=True)."""
    return _make_config


@pytest.fixture()
def create_jwt(rsa_key_pair):
    """Sign test JWTs: create_jwt(exp_offset=-60)."""
    def _factory(**kwargs):
        return _create_jwt(rsa_key_pair, **kwargs)
    return _factory

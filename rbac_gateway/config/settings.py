"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
import secrets
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = Path("/run/secrets") / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
            if secret_value:
                print(f"[settings] ✓ Loaded {secret_name} from /run/secrets")
                return secret_value
        except OSError as e:
            print(f"[settings] ✗ Failed to read /run/secrets/{secret_name}: {e}")

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            print(f"[settings] ✓ Loaded {env_var} from environment (fallback)")
            return secret_value

    return None


@dataclass
class AppConfig:
    """Application configuration container."""
    # Mode
    demo_mode: bool

    # Authority engine
    authority_url: str
    authority_timeout: float = 5.0
    authority_username: str = ""
    authority_password: str = ""
    default_context_id: str = "HOME"

    # Caller authentication
    api_static_token: str = ""
    oidc_issuer: str = ""
    oidc_jwks_url: str = ""
    oidc_audience: str = ""

    # Logging
    log_level: str = "INFO"

    @property
    def jwt_enabled(self) -> bool:
        """JWT bearer validation is active once an issuer is configured."""
        return bool(self.oidc_issuer)

    @property
    def jwks_url_resolved(self) -> str:
        """JWKS endpoint, derived from a Keycloak-style issuer when not set."""
        if self.oidc_jwks_url:
            return self.oidc_jwks_url
        return f"{self.oidc_issuer.rstrip('/')}/protocol/openid-connect/certs"


def _get_or_generate(var_name: str, demo_default: Optional[str] = None, required: bool = True, demo_mode: bool = False) -> str:
    """Get environment variable or use demo default/generate."""
    value = os.environ.get(var_name)
    if value:
        return value

    if demo_mode and demo_default is not None:
        print(f"[demo-mode] Using default for {var_name}")
        os.environ[var_name] = demo_default
        return demo_default

    if not required:
        return ""

    raise RuntimeError(f"Environment variable {var_name} is required in production mode.")


def load_settings() -> AppConfig:
    """Load application settings from environment and /run/secrets."""
    demo_mode = os.environ.get("DEMO_MODE", "false").lower() == "true"

    # ─────────────────────────────────────────────────────────────────────────
    # Secrets: /run/secrets > environment variables
    # ─────────────────────────────────────────────────────────────────────────
    authority_password = _load_secret_from_file("authority_password", "AUTHORITY_PASSWORD") or ""

    api_static_token = _load_secret_from_file("rbac_api_token", "RBAC_API_TOKEN") or ""
    if not api_static_token and demo_mode:
        api_static_token = secrets.token_urlsafe(32)
        os.environ["RBAC_API_TOKEN"] = api_static_token
        print("[demo-mode] Generated temporary RBAC_API_TOKEN")

    # Authority engine
    authority_url = _get_or_generate(
        "AUTHORITY_URL",
        demo_default="http://127.0.0.1:8081/fortress-rest",
        demo_mode=demo_mode,
    )

    timeout_str = os.environ.get("AUTHORITY_TIMEOUT", "5")
    try:
        authority_timeout = float(timeout_str)
    except ValueError:
        raise RuntimeError(f"AUTHORITY_TIMEOUT must be a number of seconds, got {timeout_str!r}")

    authority_username = os.environ.get("AUTHORITY_USERNAME", "")
    default_context_id = os.environ.get("RBAC_DEFAULT_CONTEXT_ID", "").strip() or "HOME"

    # OIDC bearer validation (optional)
    oidc_issuer = os.environ.get("OIDC_ISSUER", "").strip()
    oidc_jwks_url = os.environ.get("OIDC_JWKS_URL", "").strip()
    oidc_audience = os.environ.get("OIDC_AUDIENCE", "").strip()

    if not api_static_token and not oidc_issuer:
        raise RuntimeError("Set RBAC_API_TOKEN or OIDC_ISSUER: the RBAC API needs caller authentication.")

    log_level = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    mode_label = "DEMO" if demo_mode else "PRODUCTION"
    print(f"[settings] Mode={mode_label}; authority={authority_url}; context={default_context_id}")

    if demo_mode:
        print("[settings] WARNING: Demo defaults in use. Do not deploy with these defaults.")

    return AppConfig(
        demo_mode=demo_mode,
        authority_url=authority_url,
        authority_timeout=authority_timeout,
        authority_username=authority_username,
        authority_password=authority_password,
        default_context_id=default_context_id,
        api_static_token=api_static_token,
        oidc_issuer=oidc_issuer,
        oidc_jwks_url=oidc_jwks_url,
        oidc_audience=oidc_audience,
        log_level=log_level,
    )

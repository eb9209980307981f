"""Flask application factory and bootstrap.

This module provides the create_app() factory function for initializing
the Flask application with all blueprints, dispatchers and configuration.
"""
from __future__ import annotations
import logging
from typing import Optional

from flask import Flask

from rbac_gateway.config import AppConfig, load_settings
from rbac_gateway.core import AccessDispatcher, AdminDispatcher, ReviewDispatcher
from rbac_gateway.core.authority import AuthorityFactory


# ─────────────────────────────────────────────────────────────────────────────
# Application Factory
# ─────────────────────────────────────────────────────────────────────────────
def create_app(cfg: Optional[AppConfig] = None, factory: Optional[AuthorityFactory] = None) -> Flask:
    """Create and configure Flask application.

    Args:
        cfg: Settings to use (defaults to load_settings())
        factory: Authority handle factory (defaults to one built from cfg)
    """
    cfg = cfg or load_settings()
    factory = factory or AuthorityFactory.from_config(cfg)

    app = Flask(__name__)

    # Store config for easy access in routes
    app.config["APP_CONFIG"] = cfg

    logging.getLogger("rbac_gateway").setLevel(cfg.log_level)

    # Dispatchers are stateless; one instance each serves every request
    app.extensions["rbac"] = {
        "factory": factory,
        "access": AccessDispatcher(factory),
        "admin": AdminDispatcher(factory),
        "review": ReviewDispatcher(factory),
    }

    # Register blueprints
    from rbac_gateway.api import errors, health, rbac

    app.register_blueprint(health.bp)
    app.register_blueprint(rbac.bp, url_prefix="/rbac")

    # Register error handlers
    errors.register_error_handlers(app)

    # Log startup info
    mode_label = "DEMO" if cfg.demo_mode else "PRODUCTION"
    print(f"[flask_app] Mode={mode_label}")
    print(f"[flask_app] RBAC API registered at /rbac (authority={cfg.authority_url})")

    if cfg.demo_mode:
        print("[flask_app] WARNING: Demo mode active - do not deploy with demo credentials")

    return app


# ─────────────────────────────────────────────────────────────────────────────
# Application Instance (for Gunicorn)
# ─────────────────────────────────────────────────────────────────────────────
app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=True)

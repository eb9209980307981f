"""HTTP surface of the RBAC gateway (Flask blueprints and handlers)."""

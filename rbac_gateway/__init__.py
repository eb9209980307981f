"""RBAC Gateway Flask Application Package.

To use the Flask app:
    from rbac_gateway.flask_app import create_app

To use the dispatchers without HTTP:
    from rbac_gateway.core import AccessDispatcher, AdminDispatcher, ReviewDispatcher
    from rbac_gateway.core.authority import AuthorityFactory
"""
# Note: flask_app is not imported here so the core stays usable without Flask

"""Back-office API package (users, roles, clients, suppliers).

To use the Flask app:
    from backoffice.flask_app import create_app

To run a use case without HTTP:
    from backoffice.core.use_case import run
"""
# Note: We don't import flask_app by default so scripts and unit tests
# can use the core without building an application.

"""
Flask decorators for authentication and authorization.

Every protected route is wrapped by one of:

    @require_authentication()              valid access token only
    @require_all(Permission.MANAGE_USERS)  role holds every listed permission
    @require_any(Permission.A, Permission.B)  role holds at least one

Request lifecycle: Unauthenticated → Authenticated → Authorized | Denied.

Security:
- Bearer token (RFC 6750) verified on every request (HS256, exp mandatory)
- Permissions come from the role stored in the database, never from the token
- No caching: a role edit applies to the very next request
- Fail closed: an error while resolving the role is a 500, never a pass
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Iterable, Optional

from flask import current_app, g, request

from backoffice.api.dispatch import OPAQUE_SERVER_ERROR, error_response
from backoffice.container import Container
from backoffice.core.rbac import Permission, Principal, has_all_permissions, has_any_permission
from backoffice.core.security import ACCESS_TOKEN

logger = logging.getLogger(__name__)

PermissionCheck = Callable[[Iterable[Permission], Iterable[Permission]], bool]


def get_container() -> Container:
    """Dependency container built by create_app()."""
    return current_app.config["CONTAINER"]


def _extract_bearer_token() -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _unauthorized(message: str = "Authentication required"):
    return error_response(401, message)


def _forbidden():
    return error_response(403, "Insufficient permissions")


def _server_error():
    return error_response(500, OPAQUE_SERVER_ERROR)


def _authenticate() -> Optional[Principal]:
    token = _extract_bearer_token()
    if token is None:
        logger.warning("Request to %s without bearer token", request.path)
        return None

    principal = get_container().tokens.verify(token, ACCESS_TOKEN)
    if principal is None:
        logger.warning("Request to %s with invalid access token", request.path)
    return principal


def require_authentication():
    """
    Decorator to require a valid access token, without any permission check.

    Attaches ``g.principal`` before calling the route handler.

    Example:
        @bp.route("/me")
        @require_authentication()
        def me():
            return dispatch(run(container.get_current_user, {"user_id": g.principal.user_id}))
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                principal = _authenticate()
            except Exception:
                logger.exception("Authentication failed unexpectedly on %s", request.path)
                return _server_error()

            if principal is None:
                return _unauthorized()

            g.principal = principal
            return fn(*args, **kwargs)

        return wrapper
    return decorator


def _permission_gate(check: PermissionCheck, required: tuple[Permission, ...]):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            # Step 1: Authenticate
            try:
                principal = _authenticate()
            except Exception:
                logger.exception("Authentication failed unexpectedly on %s", request.path)
                return _server_error()

            if principal is None:
                return _unauthorized()

            # Step 2: Resolve the caller's role (fresh on every request)
            try:
                role = get_container().role_repo.find_by_key(principal.role_id)
            except Exception:
                logger.exception("Could not resolve role %s for user %s", principal.role_id, principal.user_id)
                return _server_error()

            if role is None:
                logger.warning("User %s references missing role %s", principal.user_id, principal.role_id)
                return _forbidden()

            # Step 3: Compare permission sets
            if not check(role.permissions, required):
                logger.warning(
                    "User %s (role %s) denied on %s. Required: %s, role has: %s",
                    principal.user_id,
                    role.name,
                    request.path,
                    sorted(p.value for p in required),
                    sorted(p.value for p in role.permissions),
                )
                return _forbidden()

            # Step 4: Attach identity to request context for downstream use
            g.principal = principal
            g.role = role
            g.permissions = role.permissions

            # Step 5: Call the actual route handler
            return fn(*args, **kwargs)

        return wrapper
    return decorator


def require_all(*permissions: Permission):
    """Allow the request only when the caller's role holds every listed permission."""
    return _permission_gate(has_all_permissions, tuple(permissions))


def require_any(*permissions: Permission):
    """Allow the request when the caller's role holds at least one listed permission."""
    return _permission_gate(has_any_permission, tuple(permissions))

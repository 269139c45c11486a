"""Authentication endpoints: password login and access token refresh."""
from flask import Blueprint

from backoffice.api.decorators import get_container
from backoffice.api.dispatch import OperationKind, dispatch
from backoffice.api.helpers import json_body
from backoffice.core.use_case import run

bp = Blueprint("auth", __name__)


@bp.route("/login", methods=["POST"])
def login():
    """Exchange username + password for an access/refresh token pair."""
    return dispatch(run(get_container().login, json_body()), OperationKind.OK)


@bp.route("/refresh", methods=["POST"])
def refresh():
    """Exchange a refresh token for a new access token."""
    return dispatch(run(get_container().refresh_token, json_body()), OperationKind.OK)

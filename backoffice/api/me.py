from flask import Blueprint, g

from backoffice.api.decorators import get_container, require_authentication
from backoffice.api.dispatch import OperationKind, dispatch
from backoffice.core.use_case import run

bp = Blueprint("me", __name__)


@bp.route("/me", methods=["GET"])
@require_authentication()
def current_user():
    """Profile and role of the caller."""
    return dispatch(run(get_container().get_current_user, {"user_id": g.principal.user_id}), OperationKind.OK)

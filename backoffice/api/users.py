"""User management endpoints (MANAGE_USERS only)."""
from flask import Blueprint

from backoffice.api.decorators import get_container, require_all
from backoffice.api.dispatch import OperationKind, dispatch
from backoffice.api.helpers import json_body, query_args, with_keys
from backoffice.core.rbac import Permission
from backoffice.core.use_case import run

bp = Blueprint("users", __name__)


@bp.route("", methods=["POST"])
@require_all(Permission.MANAGE_USERS)
def create_user():
    return dispatch(run(get_container().create_user, json_body()), OperationKind.CREATED)


@bp.route("", methods=["GET"])
@require_all(Permission.MANAGE_USERS)
def list_users():
    return dispatch(run(get_container().list_users, query_args()), OperationKind.OK)


@bp.route("/<user_id>", methods=["GET"])
@require_all(Permission.MANAGE_USERS)
def get_user(user_id):
    return dispatch(run(get_container().get_user, {"id": user_id}), OperationKind.OK)


@bp.route("/<user_id>", methods=["PUT"])
@require_all(Permission.MANAGE_USERS)
def update_user(user_id):
    return dispatch(run(get_container().update_user, with_keys(json_body(), id=user_id)), OperationKind.OK)


@bp.route("/<user_id>", methods=["DELETE"])
@require_all(Permission.MANAGE_USERS)
def delete_user(user_id):
    return dispatch(run(get_container().delete_user, {"id": user_id}), OperationKind.NO_CONTENT)

"""Role endpoints.

Reading roles is also open to user managers, who need role ids to assign them.
"""
from flask import Blueprint

from backoffice.api.decorators import get_container, require_all, require_any
from backoffice.api.dispatch import OperationKind, dispatch
from backoffice.api.helpers import json_body, query_args, with_keys
from backoffice.core.rbac import Permission
from backoffice.core.use_case import run

bp = Blueprint("roles", __name__)


@bp.route("", methods=["POST"])
@require_all(Permission.MANAGE_ROLES)
def create_role():
    return dispatch(run(get_container().create_role, json_body()), OperationKind.CREATED)


@bp.route("", methods=["GET"])
@require_any(Permission.MANAGE_ROLES, Permission.MANAGE_USERS)
def list_roles():
    return dispatch(run(get_container().list_roles, query_args()), OperationKind.OK)


@bp.route("/<role_id>", methods=["GET"])
@require_any(Permission.MANAGE_ROLES, Permission.MANAGE_USERS)
def get_role(role_id):
    return dispatch(run(get_container().get_role, {"id": role_id}), OperationKind.OK)


@bp.route("/<role_id>", methods=["PUT"])
@require_all(Permission.MANAGE_ROLES)
def update_role(role_id):
    return dispatch(run(get_container().update_role, with_keys(json_body(), id=role_id)), OperationKind.OK)


@bp.route("/<role_id>", methods=["DELETE"])
@require_all(Permission.MANAGE_ROLES)
def delete_role(role_id):
    return dispatch(run(get_container().delete_role, {"id": role_id}), OperationKind.NO_CONTENT)

"""Client endpoints. Reporting roles get read access."""
from flask import Blueprint

from backoffice.api.decorators import get_container, require_all, require_any
from backoffice.api.dispatch import OperationKind, dispatch
from backoffice.api.helpers import json_body, query_args, with_keys
from backoffice.core.rbac import Permission
from backoffice.core.use_case import run

bp = Blueprint("clients", __name__)


@bp.route("", methods=["POST"])
@require_all(Permission.MANAGE_CLIENTS)
def create_client():
    return dispatch(run(get_container().create_client, json_body()), OperationKind.CREATED)


@bp.route("", methods=["GET"])
@require_any(Permission.MANAGE_CLIENTS, Permission.VIEW_REPORTS)
def list_clients():
    return dispatch(run(get_container().list_clients, query_args()), OperationKind.OK)


@bp.route("/<client_id>", methods=["GET"])
@require_any(Permission.MANAGE_CLIENTS, Permission.VIEW_REPORTS)
def get_client(client_id):
    return dispatch(run(get_container().get_client, {"id": client_id}), OperationKind.OK)


@bp.route("/<client_id>", methods=["PUT"])
@require_all(Permission.MANAGE_CLIENTS)
def update_client(client_id):
    return dispatch(run(get_container().update_client, with_keys(json_body(), id=client_id)), OperationKind.OK)


@bp.route("/<client_id>", methods=["DELETE"])
@require_all(Permission.MANAGE_CLIENTS)
def delete_client(client_id):
    return dispatch(run(get_container().delete_client, {"id": client_id}), OperationKind.NO_CONTENT)

from flask import Blueprint

from backoffice.api.decorators import get_container, require_all, require_any
from backoffice.api.dispatch import OperationKind, dispatch
from backoffice.api.helpers import json_body, query_args, with_keys
from backoffice.core.rbac import Permission
from backoffice.core.use_case import run

bp = Blueprint("suppliers", __name__)


@bp.route("", methods=["POST"])
@require_all(Permission.MANAGE_SUPPLIERS)
def create_supplier():
    return dispatch(run(get_container().create_supplier, json_body()), OperationKind.CREATED)


@bp.route("", methods=["GET"])
@require_any(Permission.MANAGE_SUPPLIERS, Permission.VIEW_REPORTS)
def list_suppliers():
    return dispatch(run(get_container().list_suppliers, query_args()), OperationKind.OK)


@bp.route("/<supplier_id>", methods=["GET"])
@require_any(Permission.MANAGE_SUPPLIERS, Permission.VIEW_REPORTS)
def get_supplier(supplier_id):
    return dispatch(run(get_container().get_supplier, {"id": supplier_id}), OperationKind.OK)


@bp.route("/<supplier_id>", methods=["PUT"])
@require_all(Permission.MANAGE_SUPPLIERS)
def update_supplier(supplier_id):
    return dispatch(run(get_container().update_supplier, with_keys(json_body(), id=supplier_id)), OperationKind.OK)


@bp.route("/<supplier_id>", methods=["DELETE"])
@require_all(Permission.MANAGE_SUPPLIERS)
def delete_supplier(supplier_id):
    return dispatch(run(get_container().delete_supplier, {"id": supplier_id}), OperationKind.NO_CONTENT)

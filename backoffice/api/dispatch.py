"""Result → HTTP response.

Route handlers never build error responses themselves: they run a use case
and hand the ``Result`` to ``dispatch()`` together with the kind of operation
they performed. Failure kinds map to statuses through ``STATUS_BY_KIND`` and
nothing else; message text is never inspected.
"""
from __future__ import annotations

import logging
from enum import Enum

from flask import Response, jsonify
from werkzeug.http import HTTP_STATUS_CODES

from backoffice.core.errors import BusinessError, ErrorKind, InputValidationError
from backoffice.core.result import Result

logger = logging.getLogger(__name__)

OPAQUE_SERVER_ERROR = "Unknown error on the server!"


class OperationKind(str, Enum):
    CREATED = "created"
    OK = "ok"
    NO_CONTENT = "no_content"


SUCCESS_STATUS = {
    OperationKind.CREATED: 201,
    OperationKind.OK: 200,
    OperationKind.NO_CONTENT: 204,
}

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CREDENTIAL_MISMATCH: 401,
    ErrorKind.INVALID_TOKEN: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.UNKNOWN: 500,
}


def error_response(status: int, message: str, **extra) -> tuple[Response, int]:
    """JSON error body shared by dispatch, the auth gate and the error handlers."""
    body = {"error": HTTP_STATUS_CODES.get(status, "Error"), "message": message}
    body.update(extra)
    return jsonify(body), status


def failure_response(error: BusinessError) -> tuple[Response, int]:
    status = STATUS_BY_KIND.get(error.kind, 500)

    if status >= 500:
        # The original text stays in the log.
        logger.error("Request failed: %s", error.message)
        return error_response(status, OPAQUE_SERVER_ERROR)

    if isinstance(error, InputValidationError):
        violations = [violation.to_dict() for violation in error.violations]
        return error_response(status, "Invalid input", violations=violations)

    return error_response(status, error.message)


def dispatch(result: Result, operation: OperationKind = OperationKind.OK):
    if result.is_failure():
        return failure_response(result.value)

    status = SUCCESS_STATUS[operation]
    if operation is OperationKind.NO_CONTENT:
        return "", status
    return jsonify(result.value), status

import pytest
from flask import Flask

from backoffice.api.dispatch import STATUS_BY_KIND, OperationKind, dispatch
from backoffice.core.errors import (
    AlreadyExistsError,
    CredentialMismatchError,
    ErrorKind,
    InputValidationError,
    InvalidTokenError,
    NotFoundError,
    UnknownError,
    Violation,
)
from backoffice.core.result import failure, success


@pytest.fixture()
def app_ctx():
    app = Flask(__name__)
    with app.app_context():
        yield app


@pytest.mark.parametrize(
    "operation,status",
    [(OperationKind.CREATED, 201), (OperationKind.OK, 200)],
)
def test_success_with_body(app_ctx, operation, status):
    response, code = dispatch(success({"id": "1", "name": "Acme"}), operation)
    assert code == status
    assert response.get_json() == {"id": "1", "name": "Acme"}


def test_no_content_has_empty_body(app_ctx):
    body, code = dispatch(success(None), OperationKind.NO_CONTENT)
    assert code == 204
    assert body == ""


@pytest.mark.parametrize(
    "error,status",
    [
        (InputValidationError((Violation("id", "Invalid ID"),)), 400),
        (CredentialMismatchError(), 401),
        (InvalidTokenError(), 401),
        (NotFoundError("client", "id", "x"), 404),
        (AlreadyExistsError("client", "name"), 409),
        (UnknownError("boom"), 500),
    ],
)
def test_failure_status_table(app_ctx, error, status):
    _, code = dispatch(failure(error), OperationKind.CREATED)
    assert code == status


def test_every_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)


def test_validation_body_lists_violations(app_ctx):
    error = InputValidationError((Violation("name", "Must not be empty"), Violation("email", "Invalid email")))
    response, _ = dispatch(failure(error))
    assert response.get_json() == {
        "error": "Bad Request",
        "message": "Invalid input",
        "violations": [
            {"field": "name", "reason": "Must not be empty"},
            {"field": "email", "reason": "Invalid email"},
        ],
    }


def test_conflict_body(app_ctx):
    response, _ = dispatch(failure(AlreadyExistsError("client", "name")))
    assert response.get_json() == {"error": "Conflict", "message": "A client already exists with this name."}


def test_unknown_error_message_is_opaque(app_ctx, caplog):
    response, _ = dispatch(failure(UnknownError("password=hunter2 leaked in SQL")))
    body = response.get_json()
    assert body["message"] == "Unknown error on the server!"
    assert "hunter2" not in response.get_data(as_text=True)
    assert "hunter2" in caplog.text

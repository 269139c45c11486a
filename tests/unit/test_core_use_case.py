import logging

from backoffice.core.errors import (
    ErrorKind,
    InputValidationError,
    NotFoundError,
    UnknownError,
)
from backoffice.core.result import failure, success
from backoffice.core.use_case import UseCase, run
from backoffice.core.validators import Field, id_field

VALID_ID = "0b0c6f1e-3f8a-4c39-9a4e-6d1f0c2b7a55"


class _Lookup:
    schema = (id_field(),)

    def __init__(self, repository):
        self.repository = repository

    def execute(self, data):
        item = self.repository.find_by_key(data["id"])
        if item is None:
            return failure(NotFoundError("thing", "id", data["id"]))
        return success(item)


def test_plain_class_satisfies_protocol(mocker):
    assert isinstance(_Lookup(mocker.Mock()), UseCase)


def test_invalid_input_never_reaches_execute(mocker):
    repository = mocker.Mock()

    result = run(_Lookup(repository), {"id": "not-uuid"})

    assert result.is_failure()
    assert isinstance(result.value, InputValidationError)
    assert result.value.violations[0].field == "id"
    repository.find_by_key.assert_not_called()


def test_execute_receives_clean_input(mocker):
    repository = mocker.Mock()
    repository.find_by_key.return_value = {"id": VALID_ID}

    result = run(_Lookup(repository), {"id": VALID_ID.upper(), "extra": 1})

    assert result.is_success()
    repository.find_by_key.assert_called_once_with(VALID_ID)


def test_expected_failure_is_passed_through(mocker):
    repository = mocker.Mock()
    repository.find_by_key.return_value = None

    result = run(_Lookup(repository), {"id": VALID_ID})

    assert result.is_failure()
    assert result.value.kind is ErrorKind.NOT_FOUND


def test_exception_becomes_unknown_error(mocker, caplog):
    repository = mocker.Mock()
    repository.find_by_key.side_effect = RuntimeError("connection reset")

    with caplog.at_level(logging.ERROR, logger="backoffice.core.use_case"):
        result = run(_Lookup(repository), {"id": VALID_ID})

    assert result.is_failure()
    assert isinstance(result.value, UnknownError)
    assert result.value.original_message == "connection reset"
    assert "_Lookup failed unexpectedly" in caplog.text


def test_non_result_return_becomes_unknown_error():
    class _Sloppy:
        schema = ()

        def execute(self, data):
            return {"oops": True}

    result = run(_Sloppy(), {})
    assert result.is_failure()
    assert result.value.kind is ErrorKind.UNKNOWN


def test_unclassified_failure_becomes_unknown_error():
    class _Raw:
        schema = ()

        def execute(self, data):
            return failure("disk full")

    result = run(_Raw(), {})
    assert isinstance(result.value, UnknownError)
    assert result.value.original_message == "disk full"


def test_all_violations_reported_together():
    class _Create:
        schema = (Field("name", min_length=1), Field("email", "email"))

        def execute(self, data):
            raise AssertionError("must not run")

    result = run(_Create(), {"name": "", "email": "nope"})
    assert [v.field for v in result.value.violations] == ["name", "email"]

from dataclasses import FrozenInstanceError

import pytest

from backoffice.core.errors import NotFoundError
from backoffice.core.result import Failure, Success, failure, success


def test_success_carries_value():
    result = success({"id": "1"})
    assert isinstance(result, Success)
    assert result.is_success() is True
    assert result.is_failure() is False
    assert result.value == {"id": "1"}


def test_success_without_value_is_none():
    assert success().value is None


def test_failure_carries_error():
    error = NotFoundError("client", "id", "42")
    result = failure(error)
    assert isinstance(result, Failure)
    assert result.is_failure() is True
    assert result.is_success() is False
    assert result.value is error
    assert result.error is error


@pytest.mark.parametrize("result", [success(1), failure(NotFoundError("role", "id", "x"))])
def test_exactly_one_predicate_holds(result):
    assert result.is_success() != result.is_failure()


def test_results_are_immutable():
    result = success(1)
    with pytest.raises(FrozenInstanceError):
        result.value = 2


def test_results_compare_by_value():
    assert success(1) == success(1)
    assert success(1) != failure(1)

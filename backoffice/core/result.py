"""Two-variant outcome type returned by every use case.

A use case never raises to report an expected outcome. It returns either a
``Success`` carrying the payload or a ``Failure`` carrying a business error,
and the HTTP layer turns that into a response.

Usage:
    result = run(create_client, {"name": "Acme"})
    if result.is_success():
        body = result.value
    else:
        error = result.value
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

S = TypeVar("S")  # Success payload
F = TypeVar("F")  # Failure payload


@dataclass(frozen=True)
class Success(Generic[S]):
    """Successful outcome."""

    value: S

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure(Generic[F]):
    """Failed outcome carrying a business error."""

    value: F

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    @property
    def error(self) -> F:
        return self.value


Result = Union[Success[S], Failure[F]]


def success(value: S = None) -> Success[S]:
    return Success(value)


def failure(error: F) -> Failure[F]:
    return Failure(error)

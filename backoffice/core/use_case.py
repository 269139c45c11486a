"""Use case pipeline.

A use case is any object exposing a declarative ``schema`` and an
``execute(valid_input)`` method returning a ``Result``. ``run()`` composes
them: validate first, execute second, and convert anything unexpected into an
``UnknownError`` so callers never see an exception.

Example:
    class GetClient:
        schema = (id_field(),)

        def __init__(self, clients):
            self.clients = clients

        def execute(self, data):
            client = self.clients.find_by_key(data["id"])
            if client is None:
                return failure(NotFoundError("client", "id", data["id"]))
            return success(client.to_output())

    result = run(GetClient(repo), {"id": "..."})
"""
from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from backoffice.core.errors import BusinessError, InputValidationError, UnknownError
from backoffice.core.result import Failure, Result, Success, failure
from backoffice.core.validators import Schema, validate

logger = logging.getLogger(__name__)


@runtime_checkable
class UseCase(Protocol):
    """Capability every concrete use case satisfies."""

    schema: Schema

    def execute(self, data: dict) -> Result:
        ...


def run(use_case: UseCase, raw_input: Any) -> Result:
    """Validate ``raw_input`` and execute ``use_case``.

    Returns:
        - Failure(InputValidationError) listing every violation; execute is not called
        - whatever execute returned
        - Failure(UnknownError) when execute raised or returned something that is not a Result
    """
    name = type(use_case).__name__

    clean, violations = validate(use_case.schema, raw_input)
    if violations:
        logger.debug("%s rejected input: %d violation(s)", name, len(violations))
        return failure(InputValidationError(tuple(violations)))

    try:
        result = use_case.execute(clean)
    except Exception as exc:
        logger.error("%s failed unexpectedly: %s", name, exc, exc_info=True)
        return failure(UnknownError.from_exception(exc))

    if not isinstance(result, (Success, Failure)):
        logger.error("%s returned %r instead of a Result", name, type(result).__name__)
        return failure(UnknownError(f"{name} returned a non-Result value"))

    if result.is_failure() and not isinstance(result.value, BusinessError):
        logger.error("%s failed with unclassified error: %r", name, result.value)
        return failure(UnknownError(str(result.value)))

    return result


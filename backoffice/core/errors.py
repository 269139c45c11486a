"""Business error taxonomy.

These errors travel inside ``Failure`` results; they are not raised. Every
error carries a stable ``kind`` so the HTTP layer maps it to a status without
looking at message text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    CREDENTIAL_MISMATCH = "credential_mismatch"
    INVALID_TOKEN = "invalid_token"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Violation:
    """A single field-level validation failure."""

    field: str
    reason: str

    def to_dict(self) -> dict:
        return {"field": self.field, "reason": self.reason}


class BusinessError:
    """Base class for every failure a use case may return."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    @property
    def message(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class InputValidationError(BusinessError):
    """Input did not match the use case schema.

    Attributes:
        violations: every failing field, not only the first one
    """

    violations: tuple[Violation, ...] = ()
    kind = ErrorKind.VALIDATION

    @property
    def message(self) -> str:
        return "; ".join(f"{v.field or '<body>'}: {v.reason}" for v in self.violations) or "Invalid input"


@dataclass(frozen=True)
class AlreadyExistsError(BusinessError):
    """Creating or renaming would break a uniqueness rule."""

    entity: str
    field: Optional[str] = None
    kind = ErrorKind.ALREADY_EXISTS

    @property
    def message(self) -> str:
        field_info = f" with this {self.field}" if self.field else ""
        return f"A {self.entity} already exists{field_info}."


@dataclass(frozen=True)
class NotFoundError(BusinessError):
    """Lookup by key returned nothing."""

    entity: str
    field: str
    value: str
    kind = ErrorKind.NOT_FOUND

    @property
    def message(self) -> str:
        return f"No {self.entity} was found with {self.field}: {self.value}."


@dataclass(frozen=True)
class CredentialMismatchError(BusinessError):
    # Never says which of username or password was wrong.
    kind = ErrorKind.CREDENTIAL_MISMATCH

    @property
    def message(self) -> str:
        return "Wrong username or password"


@dataclass(frozen=True)
class InvalidTokenError(BusinessError):
    # Expired, malformed and forged tokens all look the same.
    kind = ErrorKind.INVALID_TOKEN

    @property
    def message(self) -> str:
        return "Invalid refresh token"


@dataclass(frozen=True)
class UnknownError(BusinessError):
    """Wraps an unexpected failure.

    ``original_message`` is meant for logs; the HTTP layer never echoes it.
    """

    original_message: str = field(default="Unknown error on the server!")
    kind = ErrorKind.UNKNOWN

    @classmethod
    def from_exception(cls, exc: BaseException) -> "UnknownError":
        text = str(exc).strip()
        return cls(text) if text else cls()

    @property
    def message(self) -> str:
        return self.original_message

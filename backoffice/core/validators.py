"""Declarative input validation.

A schema is plain data: a tuple of ``Field`` records. ``validate()`` is the
only routine that interprets it. Per-kind converters raise ``ValueError`` with
a human-readable reason; ``validate()`` collects every reason instead of
stopping at the first one.

Example:
    schema = (
        Field("id", "uuid"),
        Field("name", "string", required=False, min_length=1),
    )
    clean, violations = validate(schema, {"id": "not-uuid"})
    # violations == [Violation("id", "Invalid UUID")]
"""
from __future__ import annotations

import datetime
import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Optional

from backoffice.core.errors import Violation
from backoffice.core.rbac import Permission

_MISSING = object()

UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)
EMAIL_MAX_LENGTH = 254

PASSWORD_MIN_LENGTH = 8
# bcrypt only looks at the first 72 bytes.
PASSWORD_MAX_BYTES = 72
PASSWORD_SYMBOLS = "!@#$%&*+=~^-_"


@dataclass(frozen=True)
class Field:
    """Constraints for a single input field."""

    name: str
    kind: str = "string"
    required: bool = True
    nullable: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None
    choices: Optional[tuple] = None
    default: Any = _MISSING
    coerce: bool = False
    check: Optional[Callable[[Any], Optional[str]]] = None
    message: Optional[str] = None


Schema = tuple[Field, ...]


# ─────────────────────────────────────────────────────────────────────────────
# Converters (one per field kind)
# ─────────────────────────────────────────────────────────────────────────────

def _to_string(value: Any, spec: Field) -> str:
    if not isinstance(value, str):
        raise ValueError("Expected a string")
    if spec.min_length is not None and len(value) < spec.min_length:
        if spec.min_length == 1:
            raise ValueError("Must not be empty")
        raise ValueError(f"Must have at least {spec.min_length} characters")
    if spec.max_length is not None and len(value) > spec.max_length:
        raise ValueError(f"Must have at most {spec.max_length} characters")
    return value


def _to_uuid(value: Any, spec: Field) -> str:
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        raise ValueError("Invalid UUID")
    return value.lower()


def validate_email(email: Any, spec: Optional[Field] = None) -> str:
    """Validate email address.

    Args:
        email: Email address to validate

    Returns:
        Normalized (trimmed, lower-cased) email address

    Raises:
        ValueError: If email is invalid
    """
    if not isinstance(email, str):
        raise ValueError("Invalid email")
    email = email.strip().lower()
    if not email or "@" not in email or any(char.isspace() for char in email):
        raise ValueError("Invalid email")

    local, domain = email.rsplit("@", 1)
    if not local or not domain or "." not in domain or domain.startswith(".") or domain.endswith("."):
        raise ValueError("Invalid email")
    if len(email) > EMAIL_MAX_LENGTH:
        raise ValueError("Email exceeds maximum length")

    return email


def _to_integer(value: Any, spec: Field) -> int:
    if spec.coerce and isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValueError("Expected an integer") from None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("Expected an integer")
    if spec.minimum is not None and value < spec.minimum:
        raise ValueError(f"Must be greater than or equal to {spec.minimum}")
    if spec.maximum is not None and value > spec.maximum:
        raise ValueError(f"Must be less than or equal to {spec.maximum}")
    return value


def _to_boolean(value: Any, spec: Field) -> bool:
    if spec.coerce and isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes"}:
            return True
        if lowered in {"false", "0", "no"}:
            return False
    if not isinstance(value, bool):
        raise ValueError("Expected a boolean")
    return value


def _to_date(value: Any, spec: Field) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise ValueError("Expected an ISO 8601 date")
    text = value.strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValueError("Expected an ISO 8601 date") from None


def _to_permissions(value: Any, spec: Field) -> list[Permission]:
    if not isinstance(value, (list, tuple)):
        raise ValueError("Expected a list of permission codes")
    unknown = [item for item in value if not Permission.is_valid(item)]
    if unknown:
        allowed = ", ".join(p.value for p in Permission)
        raise ValueError(f"Unknown permission(s): {', '.join(map(str, unknown))}. Allowed: {allowed}")
    return sorted({Permission(item) for item in value}, key=lambda p: p.value)


_CONVERTERS: dict[str, Callable[[Any, Field], Any]] = {
    "string": _to_string,
    "uuid": _to_uuid,
    "email": validate_email,
    "integer": _to_integer,
    "boolean": _to_boolean,
    "date": _to_date,
    "permissions": _to_permissions,
}


# ─────────────────────────────────────────────────────────────────────────────
# Generic validation routine
# ─────────────────────────────────────────────────────────────────────────────

def validate(schema: Schema, raw: Any) -> tuple[dict, list[Violation]]:
    """Check ``raw`` against ``schema``.

    Returns:
        (clean input, violations). ``clean`` only holds declared fields and is
        meaningless when ``violations`` is non-empty.
    """
    if not isinstance(raw, dict):
        return {}, [Violation("", "Expected a JSON object")]

    clean: dict[str, Any] = {}
    violations: list[Violation] = []

    for spec in schema:
        value = raw.get(spec.name, _MISSING)

        if value is _MISSING:
            if spec.default is not _MISSING:
                clean[spec.name] = spec.default() if callable(spec.default) else spec.default
            elif spec.required:
                violations.append(Violation(spec.name, "Field is required"))
            continue

        if value is None:
            if spec.nullable:
                clean[spec.name] = None
            else:
                violations.append(Violation(spec.name, "Must not be null"))
            continue

        converter = _CONVERTERS.get(spec.kind)
        if converter is None:
            raise ValueError(f"Unsupported field kind: {spec.kind}")

        try:
            converted = converter(value, spec)
        except ValueError as exc:
            violations.append(Violation(spec.name, spec.message or str(exc)))
            continue

        if spec.choices is not None and converted not in spec.choices:
            violations.append(
                Violation(spec.name, f"Must be one of: {', '.join(map(str, spec.choices))}")
            )
            continue

        if spec.check is not None:
            reason = spec.check(converted)
            if reason:
                violations.append(Violation(spec.name, reason))
                continue

        clean[spec.name] = converted

    return clean, violations


# ─────────────────────────────────────────────────────────────────────────────
# Reusable checks and fragments
# ─────────────────────────────────────────────────────────────────────────────

def _strip_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    return "".join(char for char in normalized if not unicodedata.combining(char))


def check_password_rules(password: str) -> Optional[str]:
    """Return the first broken password rule, or None when the password is acceptable."""
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must have at least {PASSWORD_MIN_LENGTH} characters"
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return f"Password must not exceed {PASSWORD_MAX_BYTES} bytes"

    password = _strip_accents(password)

    if not re.search(r"[A-Za-z]", password):
        return "Password must contain at least one letter"
    if not re.search(r"[A-Z]", password):
        return "Password must contain at least one uppercase letter"
    if not re.search(r"[0-9]", password):
        return "Password must contain at least one number"
    if not any(char in PASSWORD_SYMBOLS for char in password):
        symbols = ", ".join(PASSWORD_SYMBOLS)
        return f"Password must contain at least one special character. Ex.: {symbols}"
    return None


def id_field(name: str = "id") -> Field:
    return Field(name, "uuid", message="Invalid ID")


def pagination_fields(max_limit: int) -> Schema:
    """Page/limit fields shared by every list use case (query-string friendly)."""
    return (
        Field("page", "integer", required=False, default=1, minimum=1, coerce=True),
        Field("limit", "integer", required=False, default=10, minimum=1, maximum=max_limit, coerce=True),
    )

"""Role-Based Access Control helpers.

Permissions are a closed set of capability codes. A role holds a set of them;
route gates compare that set with what the route requires. Order and
duplicates never matter, only membership.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class Permission(str, Enum):
    MANAGE_USERS = "MANAGE_USERS"
    MANAGE_ROLES = "MANAGE_ROLES"
    MANAGE_CLIENTS = "MANAGE_CLIENTS"
    MANAGE_SUPPLIERS = "MANAGE_SUPPLIERS"
    VIEW_REPORTS = "VIEW_REPORTS"

    @classmethod
    def is_valid(cls, code: Any) -> bool:
        return isinstance(code, str) and code in cls._value2member_map_

    @classmethod
    def parse_many(cls, codes: Iterable[str]) -> frozenset["Permission"]:
        """Parse stored permission codes, ignoring codes this build does not know."""
        return frozenset(cls(code) for code in codes or () if cls.is_valid(code))


@dataclass(frozen=True)
class Principal:
    """Authenticated caller for the current request (from a verified token)."""

    user_id: str
    role_id: str


def has_all_permissions(granted: Iterable[Permission], required: Iterable[Permission]) -> bool:
    """True when ``granted`` is a superset of ``required``."""
    return frozenset(required) <= frozenset(granted)


def has_any_permission(granted: Iterable[Permission], candidates: Iterable[Permission]) -> bool:
    """True when ``granted`` and ``candidates`` share at least one permission."""
    return not frozenset(granted).isdisjoint(frozenset(candidates))

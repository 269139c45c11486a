"""Domain entities.

Plain dataclasses detached from the ORM. Repositories build them with
``from_row`` and persist them with ``to_row``; use cases hand ``to_output``
dicts to the HTTP layer.
"""
from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from backoffice.core.rbac import Permission


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


def _iso(value: Optional[datetime.date]) -> Optional[str]:
    if value is None:
        return None
    # SQLite hands timestamps back without their offset; they were stored as UTC.
    if isinstance(value, datetime.datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value.isoformat()


@dataclass
class Role:
    name: str
    description: Optional[str] = None
    permissions: frozenset[Permission] = field(default_factory=frozenset)
    id: str = field(default_factory=new_id)
    created_at: datetime.datetime = field(default_factory=utc_now)
    updated_at: datetime.datetime = field(default_factory=utc_now)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Role":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row.get("description"),
            permissions=Permission.parse_many(row.get("permissions") or []),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "permissions": sorted(p.value for p in self.permissions),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_output(self) -> dict:
        output = self.to_row()
        output["created_at"] = _iso(self.created_at)
        output["updated_at"] = _iso(self.updated_at)
        return output


@dataclass
class User:
    name: str
    username: str
    email: str
    password: str
    role_id: str
    active: bool = True
    id: str = field(default_factory=new_id)
    created_at: datetime.datetime = field(default_factory=utc_now)
    updated_at: datetime.datetime = field(default_factory=utc_now)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            username=row["username"],
            email=row["email"],
            password=row["password"],
            role_id=row["role_id"],
            active=bool(row["active"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "password": self.password,
            "role_id": self.role_id,
            "active": self.active,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_output(self, role: Optional[Role] = None) -> dict:
        # The password hash never leaves the service.
        return {
            "id": self.id,
            "name": self.name,
            "username": self.username,
            "email": self.email,
            "active": self.active,
            "role_id": self.role_id,
            "role": role.name if role is not None else None,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass
class Client:
    name: str
    email: Optional[str] = None
    birth_date: Optional[datetime.date] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime.datetime = field(default_factory=utc_now)
    updated_at: datetime.datetime = field(default_factory=utc_now)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Client":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row.get("email"),
            birth_date=row.get("birth_date"),
            phone=row.get("phone"),
            notes=row.get("notes"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "birth_date": self.birth_date,
            "phone": self.phone,
            "notes": self.notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_output(self) -> dict:
        output = self.to_row()
        output["birth_date"] = _iso(self.birth_date)
        output["created_at"] = _iso(self.created_at)
        output["updated_at"] = _iso(self.updated_at)
        return output


@dataclass
class Supplier:
    name: str
    phone: Optional[str] = None
    notes: Optional[str] = None
    id: str = field(default_factory=new_id)
    created_at: datetime.datetime = field(default_factory=utc_now)
    updated_at: datetime.datetime = field(default_factory=utc_now)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Supplier":
        return cls(
            id=row["id"],
            name=row["name"],
            phone=row.get("phone"),
            notes=row.get("notes"),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def to_row(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "notes": self.notes,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_output(self) -> dict:
        output = self.to_row()
        output["created_at"] = _iso(self.created_at)
        output["updated_at"] = _iso(self.updated_at)
        return output

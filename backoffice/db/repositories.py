"""SQLAlchemy-backed repositories.

Each call opens its own short transaction; nothing is shared between
requests. Repositories return detached domain entities, never ORM rows.
"""
from __future__ import annotations

import re
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from backoffice.core.entities import Client, Role, Supplier, User, utc_now
from backoffice.db.models import Base, ClientRow, RoleRow, SupplierRow, UserRow
from backoffice.db.session import SessionScope

E = TypeVar("E")

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: \w+\.(\w+)")
_PG_UNIQUE_CODE = "23505"


class DuplicateKeyError(Exception):
    """Write rejected by a unique constraint.

    Attributes:
        field: Column that already holds the value (best effort)
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Duplicate value for {field}")


def _unique_violation_field(exc: IntegrityError, table: str) -> Optional[str]:
    """Return the offending column if ``exc`` is a unique violation, else None."""
    orig = exc.orig
    message = str(orig)

    match = _SQLITE_UNIQUE.search(message)
    if match:
        return match.group(1)

    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _PG_UNIQUE_CODE or "duplicate key value" in message:
        named = re.search(rf"uq_{table}_(\w+)", message)
        return named.group(1) if named else "key"

    return None


class SqlRepository(Generic[E]):
    """Generic persistence collaborator for one entity type."""

    model: type[Base]
    entity: Any

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    def _to_entity(self, row) -> E:
        mapping = {column.key: getattr(row, column.key) for column in self.model.__table__.columns}
        return self.entity.from_row(mapping)

    def _conditions(self, filters: dict) -> list:
        return [getattr(self.model, key) == value for key, value in filters.items() if value is not None]

    def _raise_if_duplicate(self, exc: IntegrityError) -> None:
        field = _unique_violation_field(exc, self.model.__tablename__)
        if field is not None:
            raise DuplicateKeyError(field) from exc

    def find_by_key(self, key: str) -> Optional[E]:
        with self._session_scope() as session:
            row = session.get(self.model, key)
            return self._to_entity(row) if row is not None else None

    def find_one(self, **filters: Any) -> Optional[E]:
        stmt = select(self.model).where(*self._conditions(filters)).limit(1)
        with self._session_scope() as session:
            row = session.execute(stmt).scalars().first()
            return self._to_entity(row) if row is not None else None

    def exists(self, **filters: Any) -> bool:
        return self.find_one(**filters) is not None

    def create(self, entity: E) -> E:
        try:
            with self._session_scope() as session:
                session.add(self.model(**entity.to_row()))
        except IntegrityError as exc:
            self._raise_if_duplicate(exc)
            raise
        return entity

    def update(self, key: str, partial: dict) -> Optional[E]:
        try:
            with self._session_scope() as session:
                row = session.get(self.model, key)
                if row is None:
                    return None
                for attr, value in partial.items():
                    setattr(row, attr, value)
                row.updated_at = utc_now()
                session.flush()
                updated = self._to_entity(row)
        except IntegrityError as exc:
            self._raise_if_duplicate(exc)
            raise
        return updated

    def delete(self, key: str) -> bool:
        with self._session_scope() as session:
            row = session.get(self.model, key)
            if row is None:
                return False
            session.delete(row)
            return True

    def find_many(self, filters: dict, page: int = 1, limit: int = 10) -> tuple[list[E], int]:
        conditions = self._conditions(filters)
        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(self.model.created_at.asc(), self.model.id.asc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        count_stmt = select(func.count()).select_from(self.model).where(*conditions)
        with self._session_scope() as session:
            rows = session.execute(stmt).scalars().all()
            total = session.execute(count_stmt).scalar_one()
            return [self._to_entity(row) for row in rows], int(total)


class RoleRepository(SqlRepository[Role]):
    model = RoleRow
    entity = Role

    def update(self, key: str, partial: dict) -> Optional[Role]:
        if "permissions" in partial and partial["permissions"] is not None:
            partial = {**partial, "permissions": sorted({getattr(p, "value", p) for p in partial["permissions"]})}
        return super().update(key, partial)


class UserRepository(SqlRepository[User]):
    model = UserRow
    entity = User


class ClientRepository(SqlRepository[Client]):
    model = ClientRow
    entity = Client


class SupplierRepository(SqlRepository[Supplier]):
    model = SupplierRow
    entity = Supplier

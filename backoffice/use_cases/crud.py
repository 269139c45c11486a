"""Generic create/list/get/update/delete use cases.

Concrete use cases declare a label, an entity type, the fields that must stay
unique and a schema; the behaviour below is shared. Expected outcomes
(not found, already exists) are returned as failures, never raised.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from backoffice.core.errors import AlreadyExistsError, NotFoundError
from backoffice.core.result import Result, failure, success
from backoffice.core.validators import Schema, id_field, pagination_fields
from backoffice.db.repositories import DuplicateKeyError, SqlRepository

DEFAULT_MAX_LIMIT = 100


def paginate(items: list, page: int, limit: int, total: int) -> dict:
    return {
        "data": items,
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "total_pages": math.ceil(total / limit) if limit else 0,
        },
    }


class _EntityUseCase:
    label: str = "entity"
    unique_fields: tuple[str, ...] = ()

    def __init__(self, repository: SqlRepository):
        self.repository = repository

    def present(self, entity: Any) -> dict:
        return entity.to_output()

    def check_references(self, data: dict) -> Optional[Result]:
        """Return a failure when ``data`` points at something that does not exist."""
        return None

    def _not_found(self, key: str) -> Result:
        return failure(NotFoundError(self.label, "id", key))

    def _duplicate(self, field: str) -> Result:
        return failure(AlreadyExistsError(self.label, field))


class CreateEntity(_EntityUseCase):
    entity: Any = None
    schema: Schema = ()

    def build(self, data: dict) -> Any:
        return self.entity(**data)

    def execute(self, data: dict) -> Result:
        for field in self.unique_fields:
            value = data.get(field)
            if value is not None and self.repository.exists(**{field: value}):
                return self._duplicate(field)

        rejected = self.check_references(data)
        if rejected is not None:
            return rejected

        entity = self.build(data)
        try:
            self.repository.create(entity)
        except DuplicateKeyError as exc:
            return self._duplicate(exc.field)

        return success(self.present(entity))


class ListEntities(_EntityUseCase):
    filter_fields: Schema = ()

    def __init__(self, repository: SqlRepository, max_limit: int = DEFAULT_MAX_LIMIT):
        super().__init__(repository)
        self.schema = pagination_fields(max_limit) + self.filter_fields

    def execute(self, data: dict) -> Result:
        filters = dict(data)
        page = filters.pop("page")
        limit = filters.pop("limit")

        items, total = self.repository.find_many(filters, page, limit)
        return success(paginate([self.present(item) for item in items], page, limit, total))


class GetEntity(_EntityUseCase):
    schema: Schema = (id_field(),)

    def execute(self, data: dict) -> Result:
        entity = self.repository.find_by_key(data["id"])
        if entity is None:
            return self._not_found(data["id"])
        return success(self.present(entity))


class UpdateEntity(_EntityUseCase):
    schema: Schema = (id_field(),)

    def prepare_changes(self, changes: dict) -> dict:
        return changes

    def execute(self, data: dict) -> Result:
        changes = dict(data)
        key = changes.pop("id")

        existing = self.repository.find_by_key(key)
        if existing is None:
            return self._not_found(key)

        for field in self.unique_fields:
            value = changes.get(field)
            if value is None or value == getattr(existing, field):
                continue
            other = self.repository.find_one(**{field: value})
            if other is not None and other.id != key:
                return self._duplicate(field)

        if not changes:
            return success(self.present(existing))

        rejected = self.check_references(changes)
        if rejected is not None:
            return rejected

        changes = self.prepare_changes(changes)
        try:
            updated = self.repository.update(key, changes)
        except DuplicateKeyError as exc:
            return self._duplicate(exc.field)

        if updated is None:
            return self._not_found(key)
        return success(self.present(updated))


class DeleteEntity(_EntityUseCase):
    schema: Schema = (id_field(),)

    def execute(self, data: dict) -> Result:
        key = data["id"]
        if self.repository.find_by_key(key) is None:
            return self._not_found(key)
        if not self.repository.delete(key):
            return self._not_found(key)
        return success(None)

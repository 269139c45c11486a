from __future__ import annotations

from backoffice.core.entities import Role
from backoffice.core.validators import Field, id_field
from backoffice.use_cases.crud import (
    CreateEntity,
    DeleteEntity,
    GetEntity,
    ListEntities,
    UpdateEntity,
)

LABEL = "role"


class CreateRole(CreateEntity):
    label = LABEL
    entity = Role
    unique_fields = ("name",)
    schema = (
        Field("name", min_length=1, max_length=120),
        Field("description", required=False, nullable=True),
        Field("permissions", "permissions", required=False, default=list),
    )

    def build(self, data: dict) -> Role:
        return Role(
            name=data["name"],
            description=data.get("description"),
            permissions=frozenset(data["permissions"]),
        )


class ListRoles(ListEntities):
    label = LABEL
    filter_fields = (Field("name", required=False, min_length=1),)


class GetRole(GetEntity):
    label = LABEL


class UpdateRole(UpdateEntity):
    label = LABEL
    unique_fields = ("name",)
    schema = (
        id_field(),
        Field("name", required=False, min_length=1, max_length=120),
        Field("description", required=False, nullable=True),
        Field("permissions", "permissions", required=False),
    )


class DeleteRole(DeleteEntity):
    """Roles still referenced by users are protected by the foreign key."""

    label = LABEL

from __future__ import annotations

from backoffice.core.entities import Client
from backoffice.core.validators import Field, id_field
from backoffice.use_cases.crud import (
    CreateEntity,
    DeleteEntity,
    GetEntity,
    ListEntities,
    UpdateEntity,
)

LABEL = "client"


class CreateClient(CreateEntity):
    label = LABEL
    entity = Client
    unique_fields = ("name",)
    schema = (
        Field("name", min_length=1, max_length=200),
        Field("email", "email", required=False, nullable=True),
        Field("birth_date", "date", required=False, nullable=True),
        Field("phone", required=False, nullable=True, max_length=50),
        Field("notes", required=False, nullable=True),
    )


class ListClients(ListEntities):
    label = LABEL
    filter_fields = (
        Field("name", required=False, min_length=1),
        Field("email", "email", required=False),
        Field("phone", required=False, min_length=1),
        Field("birth_date", "date", required=False),
        Field("notes", required=False, min_length=1),
    )


class GetClient(GetEntity):
    label = LABEL


class UpdateClient(UpdateEntity):
    label = LABEL
    unique_fields = ("name",)
    schema = (
        id_field(),
        Field("name", required=False, min_length=1, max_length=200),
        Field("email", "email", required=False, nullable=True),
        Field("birth_date", "date", required=False, nullable=True),
        Field("phone", required=False, nullable=True, max_length=50),
        Field("notes", required=False, nullable=True),
    )


class DeleteClient(DeleteEntity):
    label = LABEL

from __future__ import annotations

from backoffice.core.entities import Supplier
from backoffice.core.validators import Field, id_field
from backoffice.use_cases.crud import (
    CreateEntity,
    DeleteEntity,
    GetEntity,
    ListEntities,
    UpdateEntity,
)

LABEL = "supplier"


class CreateSupplier(CreateEntity):
    label = LABEL
    entity = Supplier
    unique_fields = ("name",)
    schema = (
        Field("name", min_length=1, max_length=200),
        Field("phone", required=False, nullable=True, max_length=50),
        Field("notes", required=False, nullable=True),
    )


class ListSuppliers(ListEntities):
    label = LABEL
    filter_fields = (
        Field("name", required=False, min_length=1),
        Field("phone", required=False, min_length=1),
    )


class GetSupplier(GetEntity):
    label = LABEL


class UpdateSupplier(UpdateEntity):
    label = LABEL
    unique_fields = ("name",)
    schema = (
        id_field(),
        Field("name", required=False, min_length=1, max_length=200),
        Field("phone", required=False, nullable=True, max_length=50),
        Field("notes", required=False, nullable=True),
    )


class DeleteSupplier(DeleteEntity):
    label = LABEL

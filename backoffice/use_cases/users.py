"""User management use cases.

Users are the only entity holding a secret: the password is hashed before it
reaches persistence and the hash never appears in any output. Every output
carries the role name next to ``role_id``.
"""
from __future__ import annotations

from typing import Optional

from backoffice.core.entities import User
from backoffice.core.errors import NotFoundError
from backoffice.core.result import Result, failure, success
from backoffice.core.security import PasswordHasher
from backoffice.core.validators import Field, check_password_rules, id_field
from backoffice.db.repositories import RoleRepository, UserRepository
from backoffice.use_cases.crud import (
    DEFAULT_MAX_LIMIT,
    CreateEntity,
    DeleteEntity,
    GetEntity,
    ListEntities,
    UpdateEntity,
    paginate,
)

LABEL = "user"


class _UserPresenter:
    roles: RoleRepository

    def present(self, user: User) -> dict:
        return user.to_output(self.roles.find_by_key(user.role_id))

    def check_references(self, data: dict) -> Optional[Result]:
        role_id = data.get("role_id")
        if role_id is not None and not self.roles.exists(id=role_id):
            return failure(NotFoundError("role", "id", role_id))
        return None


class CreateUser(_UserPresenter, CreateEntity):
    label = LABEL
    unique_fields = ("email", "username")
    schema = (
        Field("name", min_length=1, max_length=200),
        Field("username", min_length=3, max_length=120),
        Field("email", "email"),
        Field("password", max_length=72, check=check_password_rules),
        Field("role_id", "uuid", message="Invalid role ID"),
        Field("active", "boolean", required=False, default=True),
    )

    def __init__(self, users: UserRepository, roles: RoleRepository, hasher: PasswordHasher):
        super().__init__(users)
        self.roles = roles
        self.hasher = hasher

    def build(self, data: dict) -> User:
        return User(
            name=data["name"],
            username=data["username"],
            email=data["email"],
            password=self.hasher.hash(data["password"]),
            role_id=data["role_id"],
            active=data["active"],
        )


class ListUsers(_UserPresenter, ListEntities):
    label = LABEL
    filter_fields = (
        Field("name", required=False, min_length=1),
        Field("username", required=False, min_length=1),
        Field("email", "email", required=False),
        Field("role_id", "uuid", required=False, message="Invalid role ID"),
        Field("active", "boolean", required=False, coerce=True),
    )

    def __init__(self, users: UserRepository, roles: RoleRepository, max_limit: int = DEFAULT_MAX_LIMIT):
        super().__init__(users, max_limit)
        self.roles = roles

    def execute(self, data: dict) -> Result:
        filters = dict(data)
        page = filters.pop("page")
        limit = filters.pop("limit")

        users, total = self.repository.find_many(filters, page, limit)
        # One lookup per distinct role on the page.
        roles = {role_id: self.roles.find_by_key(role_id) for role_id in {user.role_id for user in users}}
        items = [user.to_output(roles[user.role_id]) for user in users]
        return success(paginate(items, page, limit, total))


class GetUser(_UserPresenter, GetEntity):
    label = LABEL

    def __init__(self, users: UserRepository, roles: RoleRepository):
        super().__init__(users)
        self.roles = roles


class UpdateUser(_UserPresenter, UpdateEntity):
    label = LABEL
    unique_fields = ("email", "username")
    schema = (
        id_field(),
        Field("name", required=False, min_length=1, max_length=200),
        Field("username", required=False, min_length=3, max_length=120),
        Field("email", "email", required=False),
        Field("password", required=False, max_length=72, check=check_password_rules),
        Field("role_id", "uuid", required=False, message="Invalid role ID"),
        Field("active", "boolean", required=False),
    )

    def __init__(self, users: UserRepository, roles: RoleRepository, hasher: PasswordHasher):
        super().__init__(users)
        self.roles = roles
        self.hasher = hasher

    def prepare_changes(self, changes: dict) -> dict:
        if "password" in changes:
            changes = {**changes, "password": self.hasher.hash(changes["password"])}
        return changes


class DeleteUser(DeleteEntity):
    label = LABEL

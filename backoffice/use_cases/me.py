from __future__ import annotations

from backoffice.core.errors import NotFoundError
from backoffice.core.result import Result, failure, success
from backoffice.core.validators import id_field
from backoffice.db.repositories import RoleRepository, UserRepository


class GetCurrentUser:
    """Profile of the authenticated caller, with the full role attached."""

    schema = (id_field("user_id"),)

    def __init__(self, users: UserRepository, roles: RoleRepository):
        self.users = users
        self.roles = roles

    def execute(self, data: dict) -> Result:
        user = self.users.find_by_key(data["user_id"])
        if user is None:
            return failure(NotFoundError("user", "id", data["user_id"]))

        role = self.roles.find_by_key(user.role_id)
        output = user.to_output(role)
        output["role"] = None
        if role is not None:
            output["role"] = {
                "id": role.id,
                "name": role.name,
                "description": role.description,
                "permissions": sorted(p.value for p in role.permissions),
            }
        return success(output)

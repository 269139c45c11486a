"""Login and token refresh.

Neither use case tells the caller *why* credentials or a token were refused:
unknown username, wrong password and disabled account are the same
``CredentialMismatchError``; expired, forged and wrong-type tokens are the
same ``InvalidTokenError``.
"""
from __future__ import annotations

import logging

from backoffice.core.errors import CredentialMismatchError, InvalidTokenError
from backoffice.core.rbac import Principal
from backoffice.core.result import Result, failure, success
from backoffice.core.security import ACCESS_TOKEN, REFRESH_TOKEN, PasswordHasher, TokenService
from backoffice.core.validators import Field
from backoffice.db.repositories import UserRepository

logger = logging.getLogger(__name__)

TOKEN_TYPE = "Bearer"


class Login:
    schema = (
        Field("username", min_length=1),
        Field("password", min_length=1),
    )

    def __init__(self, users: UserRepository, hasher: PasswordHasher, tokens: TokenService):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def execute(self, data: dict) -> Result:
        user = self.users.find_one(username=data["username"])
        if user is None:
            self.hasher.verify_dummy(data["password"])
            logger.info("Login refused: unknown username")
            return failure(CredentialMismatchError())

        if not self.hasher.verify(data["password"], user.password):
            logger.info("Login refused for user %s: wrong password", user.id)
            return failure(CredentialMismatchError())

        if not user.active:
            logger.info("Login refused for user %s: account disabled", user.id)
            return failure(CredentialMismatchError())

        principal = Principal(user_id=user.id, role_id=user.role_id)
        logger.info("User %s logged in", user.id)
        return success({
            "access_token": self.tokens.sign(principal, ACCESS_TOKEN),
            "refresh_token": self.tokens.sign(principal, REFRESH_TOKEN),
            "token_type": TOKEN_TYPE,
            "expires_in": self.tokens.access_ttl,
        })


class RefreshToken:
    """Trade a refresh token for a new access token.

    The account is looked up again: a deleted or disabled user gets nothing,
    and the new access token carries the user's current role.
    """

    # An empty string is a well-formed (and invalid) token, not a validation error.
    schema = (Field("refresh_token"),)

    def __init__(self, users: UserRepository, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def execute(self, data: dict) -> Result:
        refresh_token = data["refresh_token"]
        principal = self.tokens.verify(refresh_token, REFRESH_TOKEN)
        if principal is None:
            return failure(InvalidTokenError())

        user = self.users.find_by_key(principal.user_id)
        if user is None or not user.active:
            logger.info("Refresh refused for user %s: account missing or disabled", principal.user_id)
            return failure(InvalidTokenError())

        current = Principal(user_id=user.id, role_id=user.role_id)
        return success({
            "access_token": self.tokens.sign(current, ACCESS_TOKEN),
            "refresh_token": refresh_token,
            "token_type": TOKEN_TYPE,
            "expires_in": self.tokens.access_ttl,
        })

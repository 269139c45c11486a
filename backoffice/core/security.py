"""Password hashing and token signing.

Both collaborators are black boxes for the use cases:

    hasher.hash(password) -> str
    hasher.verify(password, hashed) -> bool
    tokens.sign(principal, token_type) -> str
    tokens.verify(token, token_type) -> Principal | None

Security:
    - bcrypt password hashes (cost configurable)
    - HS256-signed JWTs with mandatory exp/iat/sub claims
    - Expired, tampered and malformed tokens are indistinguishable to callers
"""
from __future__ import annotations

import datetime
import hashlib
import logging
import uuid
from typing import Optional

import bcrypt
import jwt
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError

from backoffice.core.rbac import Principal

logger = logging.getLogger(__name__)

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """bcrypt wrapper."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Checked against when the username is unknown so both paths cost the same.
        self._dummy_hash = self.hash(uuid.uuid4().hex)

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("Password must not be empty")
        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must not exceed {BCRYPT_MAX_BYTES} bytes")
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed.startswith(("$2a$", "$2b$", "$2y$")):
            raise ValueError("Unknown password hash format")
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            return False
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))

    def verify_dummy(self, password: str) -> bool:
        self.verify(password, self._dummy_hash)
        return False


class TokenService:
    """Signs and verifies access/refresh tokens carrying a Principal."""

    def __init__(
        self,
        secret: str,
        access_ttl: int = 900,
        refresh_ttl: int = 604800,
        algorithm: str = "HS256",
        issuer: str = "backoffice",
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm
        self.issuer = issuer

    def ttl_for(self, token_type: str) -> int:
        if token_type == ACCESS_TOKEN:
            return self.access_ttl
        if token_type == REFRESH_TOKEN:
            return self.refresh_ttl
        raise ValueError(f"Unknown token type: {token_type}")

    def sign(self, principal: Principal, token_type: str = ACCESS_TOKEN) -> str:
        now = datetime.datetime.now(datetime.timezone.utc)
        claims = {
            "sub": principal.user_id,
            "role_id": principal.role_id,
            "type": token_type,
            "iss": self.issuer,
            "iat": now,
            "exp": now + datetime.timedelta(seconds=self.ttl_for(token_type)),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str, token_type: str = ACCESS_TOKEN) -> Optional[Principal]:
        """Decode ``token`` and return its Principal, or None when it is not acceptable.

        Validations performed:
        1. Signature (HS256 only, ``alg: none`` rejected)
        2. Expiration (exp claim, required)
        3. Issuer
        4. Token type (an access token is not a refresh token and vice versa)
        """
        if not isinstance(token, str) or not token:
            return None
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub"]},
                leeway=5,
            )
        except JWTInvalidTokenError as exc:
            logger.info("Rejected %s token %s: %s", token_type, fingerprint(token), type(exc).__name__)
            return None

        if claims.get("type") != token_type:
            logger.info("Rejected token %s: expected type %s", fingerprint(token), token_type)
            return None

        user_id = claims.get("sub")
        role_id = claims.get("role_id")
        if not isinstance(user_id, str) or not isinstance(role_id, str) or not user_id or not role_id:
            logger.info("Rejected token %s: missing subject or role", fingerprint(token))
            return None

        return Principal(user_id=user_id, role_id=role_id)


def fingerprint(token: str) -> str:
    """Short SHA-256 prefix, safe to log in place of a token."""
    return hashlib.sha256(token.encode()).hexdigest()[:12]

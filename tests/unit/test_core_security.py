import datetime

import jwt
import pytest

from backoffice.core.rbac import Principal
from backoffice.core.security import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    PasswordHasher,
    TokenService,
    fingerprint,
)

SECRET = "unit-test-secret"
PRINCIPAL = Principal(user_id="user-1", role_id="role-1")


@pytest.fixture(scope="module")
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture()
def tokens():
    return TokenService(SECRET, access_ttl=60, refresh_ttl=120)


def test_hash_and_verify(hasher):
    hashed = hasher.hash("Passw0rd!")
    assert hashed.startswith("$2b$04$")
    assert hasher.verify("Passw0rd!", hashed) is True
    assert hasher.verify("passw0rd!", hashed) is False


def test_hash_rejects_empty_password(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")


def test_verify_rejects_unknown_hash_format(hasher):
    with pytest.raises(ValueError, match="Unknown password hash format"):
        hasher.verify("x", "plaintext")


def test_verify_refuses_overlong_password(hasher):
    hashed = hasher.hash("Passw0rd!")
    assert hasher.verify("A" * 100, hashed) is False


def test_verify_dummy_is_always_false(hasher):
    assert hasher.verify_dummy("anything") is False


def test_sign_and_verify_round_trip(tokens):
    token = tokens.sign(PRINCIPAL, ACCESS_TOKEN)
    assert tokens.verify(token, ACCESS_TOKEN) == PRINCIPAL


def test_claims_carry_type_and_expiry(tokens):
    token = tokens.sign(PRINCIPAL, REFRESH_TOKEN)
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], issuer="backoffice")
    assert claims["type"] == REFRESH_TOKEN
    assert claims["sub"] == "user-1"
    assert claims["role_id"] == "role-1"
    assert claims["exp"] - claims["iat"] == 120


def test_access_token_is_not_a_refresh_token(tokens):
    token = tokens.sign(PRINCIPAL, ACCESS_TOKEN)
    assert tokens.verify(token, REFRESH_TOKEN) is None


def test_refresh_token_is_not_an_access_token(tokens):
    token = tokens.sign(PRINCIPAL, REFRESH_TOKEN)
    assert tokens.verify(token, ACCESS_TOKEN) is None


def test_expired_token_rejected(tokens):
    now = datetime.datetime.now(datetime.timezone.utc)
    token = jwt.encode(
        {
            "sub": "user-1",
            "role_id": "role-1",
            "type": ACCESS_TOKEN,
            "iss": "backoffice",
            "iat": now - datetime.timedelta(hours=2),
            "exp": now - datetime.timedelta(hours=1),
        },
        SECRET,
        algorithm="HS256",
    )
    assert tokens.verify(token, ACCESS_TOKEN) is None


def test_token_signed_with_other_secret_rejected(tokens):
    forged = TokenService("another-secret").sign(PRINCIPAL, ACCESS_TOKEN)
    assert tokens.verify(forged, ACCESS_TOKEN) is None


def test_unsigned_token_rejected(tokens):
    token = jwt.encode(
        {"sub": "attacker", "role_id": "role-1", "type": ACCESS_TOKEN, "iss": "backoffice", "iat": 0, "exp": 4102444800},
        "",
        algorithm="none",
    )
    assert tokens.verify(token, ACCESS_TOKEN) is None


def test_token_without_role_rejected(tokens):
    now = datetime.datetime.now(datetime.timezone.utc)
    token = jwt.encode(
        {"sub": "user-1", "type": ACCESS_TOKEN, "iss": "backoffice", "iat": now, "exp": now + datetime.timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )
    assert tokens.verify(token, ACCESS_TOKEN) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", None])
def test_malformed_tokens_rejected(tokens, token):
    assert tokens.verify(token, ACCESS_TOKEN) is None


def test_unknown_token_type(tokens):
    with pytest.raises(ValueError):
        tokens.sign(PRINCIPAL, "id")


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService("")


def test_fingerprint_is_short_and_stable():
    assert fingerprint("abc") == fingerprint("abc")
    assert len(fingerprint("abc")) == 12
    assert fingerprint("abc") != fingerprint("abd")

"""Pytest shared fixtures: in-memory application, seeded roles/users, token helpers."""
import pathlib
import sys
from typing import Optional

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from backoffice.config import AppConfig
from backoffice.core.entities import Role, User
from backoffice.core.rbac import Permission, Principal
from backoffice.core.security import ACCESS_TOKEN
from backoffice.flask_app import create_app

TEST_PASSWORD = "Passw0rd!"


# ─────────────────────────────────────────────────────────────────────────────
# Application
# ─────────────────────────────────────────────────────────────────────────────
def make_config(**overrides) -> AppConfig:
    base = dict(
        demo_mode=True,
        secret_key="test-secret",
        jwt_secret="test-jwt-secret",
        database_url="sqlite://",
        sql_echo=False,
        access_token_ttl=900,
        refresh_token_ttl=604800,
        pagination_max_limit=100,
        bcrypt_rounds=4,
        log_level="WARNING",
    )
    base.update(overrides)
    return AppConfig(**base)


@pytest.fixture()
def app_config():
    return make_config()


@pytest.fixture()
def app(app_config):
    """Flask app on a private in-memory SQLite database."""
    flask_app = create_app(app_config)
    flask_app.config.update(TESTING=True)
    yield flask_app
    flask_app.config["DB_ENGINE"].dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def container(app):
    return app.config["CONTAINER"]


# ─────────────────────────────────────────────────────────────────────────────
# Seed Helpers
# ─────────────────────────────────────────────────────────────────────────────
def create_role(container, name: str, *permissions: Permission) -> Role:
    role = Role(name=name, permissions=frozenset(permissions))
    return container.role_repo.create(role)


def create_user(
    container,
    role: Role,
    username: str = "alice",
    password: str = TEST_PASSWORD,
    active: bool = True,
    email: Optional[str] = None,
) -> User:
    user = User(
        name=username.title(),
        username=username,
        email=email or f"{username}@example.com",
        password=container.hasher.hash(password),
        role_id=role.id,
        active=active,
    )
    return container.user_repo.create(user)


def bearer(container, user: User, token_type: str = ACCESS_TOKEN) -> dict:
    token = container.tokens.sign(Principal(user.id, user.role_id), token_type)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for(container):
    """Factory: Authorization headers for a fresh user whose role holds ``permissions``."""
    counter = {"n": 0}

    def _headers(*permissions: Permission) -> dict:
        counter["n"] += 1
        role = create_role(container, f"role-{counter['n']}", *permissions)
        user = create_user(container, role, username=f"user{counter['n']}")
        return bearer(container, user)

    return _headers


@pytest.fixture()
def admin_headers(headers_for):
    return headers_for(*Permission)


# ─────────────────────────────────────────────────────────────────────────────
# Pytest Configuration
# ─────────────────────────────────────────────────────────────────────────────
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "critical: marks tests as critical security tests (P0 priority)"
    )

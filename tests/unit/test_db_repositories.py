import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from backoffice.core.entities import Client, Role, Supplier, User
from backoffice.core.rbac import Permission
from backoffice.db.repositories import (
    ClientRepository,
    DuplicateKeyError,
    RoleRepository,
    SupplierRepository,
    UserRepository,
)
from backoffice.db.session import get_engine, init_db, make_session_scope, ping


@pytest.fixture()
def engine():
    engine = get_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_scope(engine):
    return make_session_scope(engine)


@pytest.fixture()
def roles(session_scope):
    return RoleRepository(session_scope)


@pytest.fixture()
def users(session_scope):
    return UserRepository(session_scope)


@pytest.fixture()
def clients(session_scope):
    return ClientRepository(session_scope)


def test_ping(engine):
    ping(engine)


def test_create_and_find_by_key(clients):
    client = clients.create(Client(name="Acme", email="hello@acme.test", birth_date=datetime.date(2000, 1, 2)))

    found = clients.find_by_key(client.id)

    assert found is not None
    assert found.name == "Acme"
    assert found.birth_date == datetime.date(2000, 1, 2)


def test_find_by_key_missing(clients):
    assert clients.find_by_key("0b0c6f1e-3f8a-4c39-9a4e-6d1f0c2b7a55") is None


def test_find_one_and_exists(clients):
    clients.create(Client(name="Acme"))
    assert clients.find_one(name="Acme").name == "Acme"
    assert clients.exists(name="Acme") is True
    assert clients.exists(name="Globex") is False


def test_unique_violation_becomes_duplicate_key_error(clients):
    clients.create(Client(name="Acme"))
    with pytest.raises(DuplicateKeyError) as excinfo:
        clients.create(Client(name="Acme"))
    assert excinfo.value.field == "name"


def test_update_persists_partial_changes(clients):
    client = clients.create(Client(name="Acme"))

    updated = clients.update(client.id, {"phone": "+41 22 000 00 00"})

    assert updated.phone == "+41 22 000 00 00"
    assert updated.name == "Acme"
    assert clients.find_by_key(client.id).phone == "+41 22 000 00 00"


def test_update_missing_returns_none(clients):
    assert clients.update("0b0c6f1e-3f8a-4c39-9a4e-6d1f0c2b7a55", {"name": "x"}) is None


def test_update_into_duplicate_raises(clients):
    clients.create(Client(name="Acme"))
    other = clients.create(Client(name="Globex"))
    with pytest.raises(DuplicateKeyError):
        clients.update(other.id, {"name": "Acme"})


def test_delete(clients):
    client = clients.create(Client(name="Acme"))
    assert clients.delete(client.id) is True
    assert clients.delete(client.id) is False
    assert clients.find_by_key(client.id) is None


def test_find_many_pages_and_counts(clients):
    for index in range(5):
        clients.create(Client(name=f"Client {index}", email="same@example.com" if index % 2 else None))

    items, total = clients.find_many({}, page=2, limit=2)
    assert total == 5
    assert [c.name for c in items] == ["Client 2", "Client 3"]

    items, total = clients.find_many({"email": "same@example.com"}, page=1, limit=10)
    assert total == 2


def test_find_many_ignores_none_filters(clients):
    clients.create(Client(name="Acme"))
    _, total = clients.find_many({"name": None}, page=1, limit=10)
    assert total == 1


def test_role_permissions_round_trip(roles):
    role = roles.create(Role(name="Sales", permissions=frozenset({Permission.MANAGE_CLIENTS})))

    updated = roles.update(role.id, {"permissions": [Permission.VIEW_REPORTS, Permission.MANAGE_CLIENTS]})

    assert updated.permissions == frozenset({Permission.MANAGE_CLIENTS, Permission.VIEW_REPORTS})


def test_user_role_foreign_key_is_enforced(roles, users):
    role = roles.create(Role(name="Staff"))
    users.create(User(name="Alice", username="alice", email="alice@example.com", password="$2b$04$x", role_id=role.id))

    with pytest.raises(IntegrityError):
        roles.delete(role.id)


def test_user_requires_existing_role(users):
    with pytest.raises(IntegrityError):
        users.create(User(name="Bob", username="bob", email="bob@example.com", password="$2b$04$x", role_id="missing"))


def test_user_unique_columns(roles, users):
    role = roles.create(Role(name="Staff"))
    users.create(User(name="Alice", username="alice", email="alice@example.com", password="h", role_id=role.id))

    with pytest.raises(DuplicateKeyError) as excinfo:
        users.create(User(name="Alice 2", username="alice", email="other@example.com", password="h", role_id=role.id))
    assert excinfo.value.field == "username"


def test_supplier_repository(session_scope):
    suppliers = SupplierRepository(session_scope)
    supplier = suppliers.create(Supplier(name="Initech", notes="net 30"))
    assert suppliers.find_by_key(supplier.id).notes == "net 30"

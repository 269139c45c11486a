from __future__ import annotations

from dataclasses import dataclass

from backoffice.config import AppConfig
from backoffice.core.security import PasswordHasher, TokenService
from backoffice.db.repositories import (
    ClientRepository,
    RoleRepository,
    SupplierRepository,
    UserRepository,
)
from backoffice.db.session import SessionScope
from backoffice.use_cases.auth import Login, RefreshToken
from backoffice.use_cases.clients import CreateClient, DeleteClient, GetClient, ListClients, UpdateClient
from backoffice.use_cases.me import GetCurrentUser
from backoffice.use_cases.roles import CreateRole, DeleteRole, GetRole, ListRoles, UpdateRole
from backoffice.use_cases.suppliers import (
    CreateSupplier,
    DeleteSupplier,
    GetSupplier,
    ListSuppliers,
    UpdateSupplier,
)
from backoffice.use_cases.users import CreateUser, DeleteUser, GetUser, ListUsers, UpdateUser


@dataclass
class Container:
    user_repo: UserRepository
    role_repo: RoleRepository
    client_repo: ClientRepository
    supplier_repo: SupplierRepository

    hasher: PasswordHasher
    tokens: TokenService

    login: Login
    refresh_token: RefreshToken
    get_current_user: GetCurrentUser

    create_user: CreateUser
    list_users: ListUsers
    get_user: GetUser
    update_user: UpdateUser
    delete_user: DeleteUser

    create_role: CreateRole
    list_roles: ListRoles
    get_role: GetRole
    update_role: UpdateRole
    delete_role: DeleteRole

    create_client: CreateClient
    list_clients: ListClients
    get_client: GetClient
    update_client: UpdateClient
    delete_client: DeleteClient

    create_supplier: CreateSupplier
    list_suppliers: ListSuppliers
    get_supplier: GetSupplier
    update_supplier: UpdateSupplier
    delete_supplier: DeleteSupplier


def build_container(cfg: AppConfig, session_scope: SessionScope) -> Container:
    user_repo = UserRepository(session_scope)
    role_repo = RoleRepository(session_scope)
    client_repo = ClientRepository(session_scope)
    supplier_repo = SupplierRepository(session_scope)

    hasher = PasswordHasher(rounds=cfg.bcrypt_rounds)
    tokens = TokenService(
        cfg.jwt_secret,
        access_ttl=cfg.access_token_ttl,
        refresh_ttl=cfg.refresh_token_ttl,
    )
    max_limit = cfg.pagination_max_limit

    return Container(
        user_repo=user_repo,
        role_repo=role_repo,
        client_repo=client_repo,
        supplier_repo=supplier_repo,
        hasher=hasher,
        tokens=tokens,
        login=Login(user_repo, hasher, tokens),
        refresh_token=RefreshToken(user_repo, tokens),
        get_current_user=GetCurrentUser(user_repo, role_repo),
        create_user=CreateUser(user_repo, role_repo, hasher),
        list_users=ListUsers(user_repo, role_repo, max_limit),
        get_user=GetUser(user_repo, role_repo),
        update_user=UpdateUser(user_repo, role_repo, hasher),
        delete_user=DeleteUser(user_repo),
        create_role=CreateRole(role_repo),
        list_roles=ListRoles(role_repo, max_limit),
        get_role=GetRole(role_repo),
        update_role=UpdateRole(role_repo),
        delete_role=DeleteRole(role_repo),
        create_client=CreateClient(client_repo),
        list_clients=ListClients(client_repo, max_limit),
        get_client=GetClient(client_repo),
        update_client=UpdateClient(client_repo),
        delete_client=DeleteClient(client_repo),
        create_supplier=CreateSupplier(supplier_repo),
        list_suppliers=ListSuppliers(supplier_repo, max_limit),
        get_supplier=GetSupplier(supplier_repo),
        update_supplier=UpdateSupplier(supplier_repo),
        delete_supplier=DeleteSupplier(supplier_repo),
    )

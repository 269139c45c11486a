from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.sql import expression

from backoffice.core.entities import utc_now

naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=naming_convention)


class Base(DeclarativeBase):
    metadata = metadata


class RoleRow(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True)
    name = Column(String(120), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    permissions = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    username = Column(String(120), unique=True, nullable=False)
    email = Column(String(254), unique=True, nullable=False)
    password = Column(String(100), nullable=False)
    active = Column(Boolean, nullable=False, server_default=expression.true())
    role_id = Column(String(36), ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    __table_args__ = (Index("ix_users_role_id", "role_id"),)


class ClientRow(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), unique=True, nullable=False)
    email = Column(String(254), nullable=True)
    birth_date = Column(Date, nullable=True)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)


class SupplierRow(Base):
    __tablename__ = "suppliers"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), unique=True, nullable=False)
    phone = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

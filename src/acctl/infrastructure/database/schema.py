"""SQLAlchemy Core table definitions for the account store."""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("username", Text),
    Column("username_lower", Text, unique=True),
    Column("password_hash", Text),
    Column("status", Text, nullable=False, default="ACTIVE", server_default="ACTIVE"),
    Column("disabled", Integer, nullable=False, default=0, server_default="0"),
    Column("created_at", Text, nullable=False),
)

profiles = Table(
    "profiles",
    metadata,
    Column("user_id", Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("position", Integer, nullable=False),  # preserves profile order
    Column("provider", Text, nullable=False),
    Column("profile_id", Text, nullable=False),
    Column("metadata", Text),  # JSON object
    UniqueConstraint("provider", "profile_id"),
)

user_roles = Table(
    "user_roles",
    metadata,
    Column("user_id", Text, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("role", Text, nullable=False),
    UniqueConstraint("user_id", "role"),
)

Index("ix_profiles_user", profiles.c.user_id)
Index("ix_user_roles_user", user_roles.c.user_id)

"""SQLite database engine and schema via SQLAlchemy Core."""

from acctl.infrastructure.database.engine import create_db_engine, init_database
from acctl.infrastructure.database.schema import metadata, profiles, user_roles, users

__all__ = [
    "create_db_engine",
    "init_database",
    "metadata",
    "profiles",
    "user_roles",
    "users",
]

"""Infrastructure layer: SQLite store, password hashing, process lifecycle.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It must never import from services, commands, or output.
"""

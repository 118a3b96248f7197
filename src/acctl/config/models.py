"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, acctl.toml only contains overrides.
An empty (or missing) acctl.toml gives a working local store.
"""

from __future__ import annotations

from pydantic import BaseModel

# --- acctl.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    # Relative paths resolve against the directory holding acctl.toml.
    path: str = ".acctl/accounts.db"


class AccountsConfig(BaseModel):
    """[accounts] section: password and username acceptance rules."""

    model_config = {"frozen": True}

    min_password_length: int = 8
    max_password_length: int = 128
    username_pattern: str = r"^[A-Za-z0-9_]+$"
    min_username_length: int = 2
    max_username_length: int = 32


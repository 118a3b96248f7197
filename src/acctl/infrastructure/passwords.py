"""PBKDF2 password hashing.

Stored format: ``pbkdf2_sha256$<iterations>$<salt b64>$<hash b64>``.
Each hash records its own iteration count and salt, so raising
``ITERATIONS`` only affects newly stored passwords.
"""

from __future__ import annotations

import hashlib
import secrets
from base64 import b64encode

ALGORITHM = "pbkdf2_sha256"
HASH_FUNCTION = "sha256"
SALT_LENGTH = 16
ITERATIONS = 240_000


def hash_password(password: str, *, iterations: int = ITERATIONS) -> str:
    salt = secrets.token_bytes(SALT_LENGTH)
    digest = hashlib.pbkdf2_hmac(HASH_FUNCTION, password.encode("utf-8"), salt, iterations)
    return "$".join(
        [ALGORITHM, str(iterations), b64encode(salt).decode("ascii"), b64encode(digest).decode("ascii")]
    )

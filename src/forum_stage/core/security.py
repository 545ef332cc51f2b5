"""Password hashing helpers."""
from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerifyMismatchError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Return an Argon2id hash of ``password`` in PHC string form."""
    return str(_hasher.hash(password))


def verify_password(password: str, stored: str) -> bool:
    """Check ``password`` against a value produced by :func:`hash_password`."""
    try:
        return bool(_hasher.verify(stored, password))
    except (VerifyMismatchError, InvalidHashError):
        return False

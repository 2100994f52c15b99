"""
banana_bank/utils/security.py

Password hashing helpers built directly on the `bcrypt` library.

bcrypt only looks at the first 72 bytes of its input. Rather than silently
truncating, we refuse longer passwords so two different passwords can never
share a hash.
"""

import os
import bcrypt

BCRYPT_MAX_BYTES = 72
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


def _encode(password: str) -> bytes:
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_BYTES:
        raise ValueError(
            f"Password is {len(encoded)} bytes; bcrypt accepts at most {BCRYPT_MAX_BYTES} bytes"
        )
    return encoded


def hash_password(password: str) -> str:
    """
    Hash a plain-text password with a fresh random salt.
    Two calls with the same password return different hashes.
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Return True iff `password` is the one that produced `password_hash`.
    Oversized or malformed input simply fails verification.
    """
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        return False

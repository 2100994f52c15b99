"""
Tests for password hashing: the bcrypt helpers in utils/security.py and the
way create_user stores a hash instead of the password.
"""

import bcrypt
import pytest

from banana_bank.models.user import User
from banana_bank.services.user import create_user
from banana_bank.utils import security
from banana_bank.utils.security import BCRYPT_MAX_BYTES, hash_password, verify_password

PASSWORDS = [
    "password123",
    "p@$$w0rd!#%^&*()[]{}|;:,./<>?",
    "contraseña-密码-пароль",
    "a" * BCRYPT_MAX_BYTES,
    "\U0001F510" * 18,  # 4 bytes each, exactly at the limit
]


@pytest.mark.parametrize("password", PASSWORDS)
def test_hash_round_trip(password):
    hashed = hash_password(password)

    assert hashed != password
    assert verify_password(password, hashed)
    assert not verify_password(password + "x", hashed)


def test_hash_uses_configured_rounds():
    prefix, rounds, _ = hash_password("password123").lstrip("$").split("$")

    assert prefix == "2b"
    assert int(rounds) == security.BCRYPT_ROUNDS


def test_salt_differs_per_call():
    hashes = {hash_password("password123") for _ in range(3)}
    assert len(hashes) == 3


def test_hash_is_plain_bcrypt():
    # Readable by any bcrypt implementation
    hashed = hash_password("password123")
    assert bcrypt.checkpw(b"password123", hashed.encode("utf-8"))


@pytest.mark.parametrize("password", ["a" * (BCRYPT_MAX_BYTES + 1), "\U0001F510" * 19])
def test_oversized_passwords_are_refused(password):
    with pytest.raises(ValueError, match="72 bytes"):
        hash_password(password)


@pytest.mark.parametrize(
    "password, password_hash",
    [
        ("", "$2b$04$abcdefghijklmnopqrstuu"),
        ("password123", ""),
        ("password123", None),
        ("password123", "not-a-bcrypt-hash"),
    ],
)
def test_verify_fails_closed(password, password_hash):
    assert verify_password(password, password_hash) is False


def test_verify_refuses_oversized_candidate():
    # Same first 72 bytes must not be enough to log in
    hashed = hash_password("b" * BCRYPT_MAX_BYTES)
    assert verify_password("b" * (BCRYPT_MAX_BYTES + 1), hashed) is False


def test_user_model_helpers():
    user = User(name="Jane Doe")
    user.set_password("hunter22")

    assert user.password_hash.startswith("$2b$")
    assert user.verify_password("hunter22")
    assert not user.verify_password("Hunter22")


def test_create_user_stores_only_the_hash(store, fetch_user):
    attrs = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "s3cret-enough",
        "address": "456 Oak Ave",
    }

    created = create_user(attrs, store).value
    saved = fetch_user(created.id)

    assert saved.password_hash != attrs["password"]
    assert "s3cret-enough" not in saved.password_hash
    assert verify_password("s3cret-enough", saved.password_hash)


def test_create_user_rejects_oversized_password_before_hashing(store):
    attrs = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "password": "a" * (BCRYPT_MAX_BYTES + 1),
        "address": "456 Oak Ave",
    }

    result = create_user(attrs, store)

    assert result.errors == {"password": ["should be at most 72 byte(s)"]}

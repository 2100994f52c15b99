"""
banana_bank/services/user.py

Handles user-level operations (create, get, update, delete).

Every operation returns a Result (see services/result.py) rather than
raising for bad input:
 - a malformed id and an id with no row both come back as NotFound
 - validation problems come back as ValidationFailed with every error
Database failures are not handled here; they propagate to the app's
exception handler.
"""

import logging
import re
from typing import Any

from pydantic import BaseModel

from banana_bank.models.user import User
from banana_bank.repositories.user import UserStore
from banana_bank.services.result import NotFound, Result, Success, ValidationFailed
from banana_bank.services.validation import validate_user_create, validate_user_update

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r"[0-9]+")
# Largest key a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


def resolve_user_id(raw_id) -> int | None:
    """
    Turn a client-supplied id into a store key, or None if it can't be one.

    Accepts positive ints and strings made only of ASCII digits that fit a
    64-bit key. Everything else (None, floats, bools, zero, negatives,
    "abc", "", dicts, ...) is rejected.
    """
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        value = raw_id
    elif isinstance(raw_id, str) and ID_PATTERN.fullmatch(raw_id):
        value = int(raw_id)
    else:
        return None
    return value if 0 < value <= MAX_ID else None


def _field_set(user_data) -> dict[str, Any]:
    """Only the keys the client actually sent."""
    if user_data is None:
        return {}
    if isinstance(user_data, BaseModel):
        return user_data.model_dump(exclude_unset=True)
    return dict(user_data)


def _lookup(raw_id, store: UserStore) -> User | None:
    user_id = resolve_user_id(raw_id)
    if user_id is None:
        logger.debug("Rejected malformed user id %r", raw_id)
        return None
    return store.find_by_id(user_id)


def create_user(user_data, store: UserStore) -> Result[User]:
    """
    Validate, hash the password, and persist a new User.
    The plain password is discarded once hashed.
    """
    result = validate_user_create(_field_set(user_data))
    if not result.valid:
        logger.info("User creation rejected: %s", sorted(result.errors))
        return ValidationFailed(result.errors)

    changes = dict(result.changes)
    password = changes.pop("password")
    new_user = User(**changes)
    new_user.set_password(password)

    store.insert(new_user)
    logger.info("Created user id=%s", new_user.id)
    return Success(new_user)


def get_user(user_id, store: UserStore) -> Result[User]:
    """
    Return the User with the given id, or NotFound.
    """
    user = _lookup(user_id, store)
    if user is None:
        return NotFound()
    return Success(user)


def update_user(user_id, user_data, store: UserStore) -> Result[User]:
    """
    Apply a partial update to an existing user.

    Only name, email, address and balance can change. Keys that were not
    sent keep their stored value. If anything fails validation nothing is
    written.
    """
    user = _lookup(user_id, store)
    if user is None:
        return NotFound()

    result = validate_user_update(_field_set(user_data))
    if not result.valid:
        logger.info("Update of user id=%s rejected: %s", user.id, sorted(result.errors))
        return ValidationFailed(result.errors)

    store.update(user, result.changes)
    logger.info("Updated user id=%s fields=%s", user.id, sorted(result.changes))
    return Success(user)


def delete_user(user_id, store: UserStore) -> Result[User]:
    """
    Permanently delete a user. Returns the record as it was just before
    removal; a second delete of the same id is NotFound.
    """
    user = _lookup(user_id, store)
    if user is None:
        return NotFound()

    removed = store.delete(user)
    logger.info("Deleted user id=%s", removed.id)
    return Success(removed)

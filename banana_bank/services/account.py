"""
banana_bank/services/account.py

Manages creation of Accounts. Each User may own exactly one Account, and an
account balance can never be negative. Both rules are checked here first and
also enforced by the database (unique user_id, balance >= 0 check).
"""

import logging

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from banana_bank.models.account import Account
from banana_bank.models.user import User
from banana_bank.services.result import NotFound, Result, Success, ValidationFailed
from banana_bank.services.user import resolve_user_id
from banana_bank.services.validation import validate_account_create

logger = logging.getLogger(__name__)

TAKEN = "has already been taken"


def get_account_by_user_id(user_id: int, db: Session) -> Account | None:
    """
    Return the Account owned by the given user, or None.
    """
    return db.query(Account).filter(Account.user_id == user_id).first()


def create_account(account_data, db: Session) -> Result[Account]:
    """
    Create a new Account for an existing user.

    - user_id must name an existing User (NotFound otherwise)
    - a user that already has an account gets a user_id error
    - balance defaults to 0.00000 and must be >= 0
    """
    fields = (
        account_data.model_dump(exclude_unset=True)
        if isinstance(account_data, BaseModel) else dict(account_data or {})
    )
    result = validate_account_create(fields)
    if not result.valid:
        return ValidationFailed(result.errors)

    user_id = resolve_user_id(result.changes["user_id"])
    if user_id is None or db.get(User, user_id) is None:
        return NotFound()

    if get_account_by_user_id(user_id, db):
        return ValidationFailed({"user_id": [TAKEN]})

    new_account = Account(user_id=user_id, balance=result.changes["balance"])
    db.add(new_account)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with another request for the same user
        db.rollback()
        logger.info("Account for user id=%s already exists", user_id)
        return ValidationFailed({"user_id": [TAKEN]})

    db.refresh(new_account)
    logger.info("Created account id=%s for user id=%s", new_account.id, user_id)
    return Success(new_account)

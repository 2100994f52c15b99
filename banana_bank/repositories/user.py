"""
banana_bank/repositories/user.py

Persistence port for users. The service layer only talks to a UserStore;
SqlAlchemyUserStore is the adapter backed by a SQLAlchemy Session.

Each call is a single unit of work: it commits on success and rolls the
session back (then re-raises) if the database refuses the write.
"""

import logging
from typing import Any, Mapping, Protocol

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from banana_bank.database import utcnow
from banana_bank.models.user import User

logger = logging.getLogger(__name__)

# The only columns an update may ever touch
UPDATABLE_COLUMNS = frozenset({"name", "email", "address", "balance"})


class UserStore(Protocol):
    def insert(self, user: User) -> User: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def update(self, user: User, changes: Mapping[str, Any]) -> User: ...

    def delete(self, user: User) -> User: ...


def snapshot(user: User) -> User:
    """
    Return a detached copy of `user` carrying every column value.
    Used to hand back a record after its row is gone.
    """
    values = {attr.key: getattr(user, attr.key) for attr in inspect(User).column_attrs}
    return User(**values)


class SqlAlchemyUserStore:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, action: str, user_id) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("users.%s failed for id=%s", action, user_id)
            raise

    def insert(self, user: User) -> User:
        self.db.add(user)
        self._commit("insert", user.id)
        self.db.refresh(user)
        return user

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def update(self, user: User, changes: Mapping[str, Any]) -> User:
        for key, value in changes.items():
            if key in UPDATABLE_COLUMNS:
                setattr(user, key, value)
        user.updated_at = utcnow()
        self._commit("update", user.id)
        self.db.refresh(user)
        return user

    def delete(self, user: User) -> User:
        removed = snapshot(user)
        self.db.delete(user)
        self._commit("delete", removed.id)
        return removed

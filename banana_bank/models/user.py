"""
banana_bank/models/user.py

Represents a bank customer. Each user has contact details, a text balance
(kept as exact text so it never drifts through floating point), a bcrypt
password hash, and at most one Account.
"""

from __future__ import annotations
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column
from banana_bank.database import Base, UTCDateTime, utcnow
from banana_bank.utils.security import hash_password, verify_password

if TYPE_CHECKING:
    from banana_bank.models.account import Account

DEFAULT_BALANCE = "0.00000"


class User(Base):
    """
    The main user table. Each user has:
      - An ID (PK), assigned by the database
      - name, email, address
      - A hashed password (the plain password is never stored)
      - A balance stored as text with 5 fractional digits
      - created_at / updated_at, maintained here rather than by callers
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False)

    # Bcrypt-hashed password storage
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    address: Mapped[str] = mapped_column(String(255), nullable=False)
    balance: Mapped[str] = mapped_column(String(64), nullable=False, default=DEFAULT_BALANCE)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    # One-to-one: the user's bank account, removed together with the user
    account: Mapped[Optional[Account]] = relationship(
        "Account",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        doc="The account owned by this user, if any."
    )

    def set_password(self, password: str) -> None:
        """
        Hash and store the user's password using bcrypt.
        The field 'password_hash' holds the result.
        """
        self.password_hash = hash_password(password)

    def verify_password(self, password: str) -> bool:
        """
        Verify a plain-text password against the stored hash.
        """
        return verify_password(password, self.password_hash)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"

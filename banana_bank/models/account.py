"""
banana_bank/models/account.py

Defines the Account model. Each User owns at most one Account; the database
enforces both the one-to-one link (unique user_id) and a non-negative balance.

User => One-to-one => Account
"""

from decimal import Decimal
from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric
from sqlalchemy.orm import relationship
from banana_bank.database import Base, UTCDateTime, utcnow


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="balance_must_be_positive"),
    )

    # ---------------------------------------------------------------------
    # Primary Key & Fields
    # ---------------------------------------------------------------------
    id = Column(Integer, primary_key=True, index=True)

    balance = Column(Numeric(18, 5), nullable=False, default=Decimal("0.00000"))

    # Each Account belongs to exactly one User, and a User has at most one Account
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        unique=True,
        index=True,
    )

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # ---------------------------------------------------------------------
    # Relationships
    # ---------------------------------------------------------------------
    user = relationship(
        "User",
        back_populates="account",
        doc="The user that owns this account."
    )

    def __repr__(self):
        return f"<Account(id={self.id}, user_id={self.user_id}, balance={self.balance})>"

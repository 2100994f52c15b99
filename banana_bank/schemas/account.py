"""
banana_bank/schemas/account.py

Defines Pydantic schemas for creating and reading Account objects.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from banana_bank.services.balance import round_balance


class AccountCreate(BaseModel):
    """
    Schema for creating a new Account. user_id names the owning user;
    balance is optional and defaults to zero. Both are checked by the
    service layer so errors come back as {field: [messages]}.
    """
    model_config = ConfigDict(extra="ignore")

    user_id: Optional[Any] = None
    balance: Optional[Any] = None


class AccountView(BaseModel):
    """
    Schema returned after creating an Account. The balance is rounded
    half-up to the cent.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    user_id: Optional[int] = None
    balance: float = 0.0

    @field_validator("balance", mode="before")
    @classmethod
    def display_balance(cls, v):
        return round_balance(v)

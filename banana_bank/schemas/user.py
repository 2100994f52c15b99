"""
banana_bank/schemas/user.py

Defines the Pydantic schemas for user creation, update, and read.

UserCreate / UserUpdate are the field-sets accepted from clients. Every field
is optional and untyped at this level: required/format/length rules live in
banana_bank.services.validation so that all violations can be reported
together, in the same {field: [messages]} shape.

Unknown keys (password_hash, id, created_at, ...) are dropped on parse, so
they can never reach the service layer.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from banana_bank.services.balance import format_balance


class UserCreate(BaseModel):
    """
    For creating a new user. The client supplies a raw 'password'
    which is hashed by the service layer before storing.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[Any] = None
    email: Optional[Any] = None
    password: Optional[Any] = None
    address: Optional[Any] = None
    balance: Optional[Any] = None


class UserUpdate(BaseModel):
    """
    Fields for updating an existing user record. All optional, and only the
    keys the client actually sent are applied (PATCH semantics).
    Passwords cannot be changed through this schema.
    """
    model_config = ConfigDict(extra="ignore")

    name: Optional[Any] = None
    email: Optional[Any] = None
    address: Optional[Any] = None
    balance: Optional[Any] = None


class UserView(BaseModel):
    """
    Schema for returning user data to clients.
    Includes the DB 'id' but never the password or its hash. The stored
    text balance is rendered as a number truncated to 2 decimals.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: Optional[Any] = None
    email: Optional[Any] = None
    address: Optional[Any] = None
    balance: float = 0.0

    @field_validator("balance", mode="before")
    @classmethod
    def display_balance(cls, v):
        return format_balance(v)

"""
banana_bank/views/user.py

Response bodies for the /api/users endpoints. Each function takes a User
(or nothing) and returns a plain dict ready for JSON encoding.
"""

from banana_bank.schemas.user import UserView
from banana_bank.services.result import FieldErrors, NOT_FOUND_MESSAGE

CREATED_MESSAGE = "User created successfully"
UPDATED_MESSAGE = "User updated successfully"
DELETED_MESSAGE = "User deleted successfully"


def user_data(user) -> dict:
    return UserView.model_validate(user).model_dump()


def render_create(user) -> dict:
    return {"message": CREATED_MESSAGE, "data": user_data(user)}


def render_show(user) -> dict:
    return {"user": user_data(user)}


def render_update(user) -> dict:
    return {"message": UPDATED_MESSAGE, "user": user_data(user)}


def render_delete() -> dict:
    return {"message": DELETED_MESSAGE}


def render_errors(errors: FieldErrors) -> dict:
    return {"errors": errors}


def render_not_found() -> dict:
    return {"errors": NOT_FOUND_MESSAGE}

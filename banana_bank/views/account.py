"""
banana_bank/views/account.py

Response bodies for the /api/accounts endpoints.
"""

from banana_bank.schemas.account import AccountView

CREATED_MESSAGE = "Account created successfully"


def account_data(account) -> dict:
    return AccountView.model_validate(account).model_dump()


def render_create(account) -> dict:
    return {"message": CREATED_MESSAGE, "data": account_data(account)}

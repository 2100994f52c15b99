"""
banana_bank/routers/account.py

FastAPI router handling Account endpoints. An account is created for an
existing user; each user can have only one.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from banana_bank.database import get_db
from banana_bank.schemas.account import AccountCreate
from banana_bank.services import account as account_service
from banana_bank.services.result import NotFound, Success
from banana_bank.views import account as account_views
from banana_bank.views.user import render_errors, render_not_found

router = APIRouter(tags=["accounts"])


@router.post("", status_code=201)
def create_account(account: Optional[AccountCreate] = None, db: Session = Depends(get_db)):
    """
    Create a new Account. The request body (AccountCreate) includes:
      - user_id: the owner (must exist, and must not already have an account)
      - balance: optional starting balance, >= 0

    Returns 201 with the account, 404 for an unknown user, 422 otherwise.
    """
    result = account_service.create_account(account, db)
    if isinstance(result, Success):
        return account_views.render_create(result.value)
    if isinstance(result, NotFound):
        return JSONResponse(status_code=404, content=render_not_found())
    return JSONResponse(status_code=422, content=render_errors(result.errors))

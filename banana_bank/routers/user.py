# FILE: banana_bank/routers/user.py

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from banana_bank.database import get_db
from banana_bank.repositories.user import SqlAlchemyUserStore, UserStore
from banana_bank.schemas.user import UserCreate, UserUpdate
from banana_bank.services import user as user_service
from banana_bank.services.result import NotFound, Success, ValidationFailed
from banana_bank.views import user as user_views

# Create a FastAPI router instance with the "users" tag for API documentation
router = APIRouter(tags=["users"])


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    """
    Wrap the request's DB session in the user persistence adapter.
    """
    return SqlAlchemyUserStore(db)


def _failure(result) -> JSONResponse:
    if isinstance(result, NotFound):
        return JSONResponse(status_code=404, content=user_views.render_not_found())
    if isinstance(result, ValidationFailed):
        return JSONResponse(status_code=422, content=user_views.render_errors(result.errors))
    raise TypeError(f"Unexpected service result: {result!r}")


@router.post("", status_code=201)
def create_user(user_data: Optional[UserCreate] = None, store: UserStore = Depends(get_user_store)):
    """
    Create a user: POST /api/users

    - Validates name, email, password, address (and optional balance)
    - Hashes the password before storing it
    - Returns 201 with the new user, or 422 with every validation error
    """
    result = user_service.create_user(user_data, store)
    if isinstance(result, Success):
        return user_views.render_create(result.value)
    return _failure(result)


@router.get("/{user_id}")
def show_user(user_id: str, store: UserStore = Depends(get_user_store)):
    """
    Fetch one user: GET /api/users/{user_id}

    A malformed id and an unknown id both return 404.
    """
    result = user_service.get_user(user_id, store)
    if isinstance(result, Success):
        return user_views.render_show(result.value)
    return _failure(result)


@router.api_route("/{user_id}", methods=["PUT", "PATCH"])
def update_user(
    user_id: str,
    user_data: Optional[UserUpdate] = None,
    store: UserStore = Depends(get_user_store),
):
    """
    Partially update a user: PUT or PATCH /api/users/{user_id}

    - Only name, email, address and balance can change
    - Omitted fields keep their current value
    - Returns 404 for unknown ids, 422 for invalid fields
    """
    result = user_service.update_user(user_id, user_data, store)
    if isinstance(result, Success):
        return user_views.render_update(result.value)
    return _failure(result)


@router.delete("/{user_id}")
def delete_user(user_id: str, store: UserStore = Depends(get_user_store)):
    """
    Delete a user by ID: DELETE /api/users/{user_id}

    Returns 204 with a confirmation message, or 404 if there is no such user.
    """
    result = user_service.delete_user(user_id, store)
    if isinstance(result, Success):
        return JSONResponse(status_code=204, content=user_views.render_delete())
    return _failure(result)

"""
banana_bank/services/result.py

Outcome types returned by the service layer. Routers branch on these with
isinstance() instead of catching exceptions:

 - Success(value)            -> 200/201/204
 - ValidationFailed(errors)  -> 422, errors is {field: [messages]}
 - NotFound()                -> 404, fixed message
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")

FieldErrors = dict[str, list[str]]

NOT_FOUND_MESSAGE = "Not found"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class ValidationFailed:
    errors: FieldErrors = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    message: str = NOT_FOUND_MESSAGE


Result = Union[Success[T], ValidationFailed, NotFound]

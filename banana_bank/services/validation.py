"""
banana_bank/services/validation.py

Field validation for user and account input.

Every rule is applied independently and all violations are collected, so a
client gets the full list of problems in one response. Output order is
stable: fields in declaration order (name, email, password, address,
balance), and within a field required -> format -> length.

The email minimum length (5) can never trigger on its own because the
format rule already needs at least 8 characters. It is kept as-is.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from banana_bank.models.user import DEFAULT_BALANCE
from banana_bank.services.balance import parse_decimal
from banana_bank.services.result import FieldErrors
from banana_bank.utils.security import BCRYPT_MAX_BYTES

# Letters (ASCII and accented Latin), whitespace, apostrophes and hyphens
NAME_PATTERN = re.compile(r"[A-Za-zÀ-ÖØ-öø-ÿ\s'\-]+")
DIGITS_PATTERN = re.compile(r"[0-9]+")

NAME_MAX_LENGTH = 100
EMAIL_MIN_LENGTH = 5
EMAIL_MAX_LENGTH = 100

BLANK = "can't be blank"
INVALID_FORMAT = "has invalid format"
INVALID = "is invalid"
INSUFFICIENT_FUNDS = "insufficient funds"

CREATE_FIELDS = ("name", "email", "password", "address", "balance")
UPDATE_FIELDS = ("name", "email", "address", "balance")
REQUIRED_ON_CREATE = ("name", "email", "password", "address")


def too_short(count: int, unit: str = "character") -> str:
    return f"should be at least {count} {unit}(s)"


def too_long(count: int, unit: str = "character") -> str:
    return f"should be at most {count} {unit}(s)"


@dataclass
class ValidationResult:
    """
    Either the accepted field-set (`changes`) or the collected `errors`.
    """
    changes: dict[str, Any] = field(default_factory=dict)
    errors: FieldErrors = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, name: str, message: str) -> None:
        self.errors.setdefault(name, []).append(message)


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def is_scalar(value) -> bool:
    """None, text or a plain number. Lists, objects and booleans are not."""
    if isinstance(value, bool):
        return False
    return value is None or isinstance(value, (str, int, float, Decimal))


def _as_text(value):
    if value is None or isinstance(value, str):
        return value
    return str(value)


def email_format_ok(value: str) -> bool:
    """
    True if some line of `value` has 3+ characters, an "@", 3+ characters,
    a ".", then 2+ characters. Runs in linear time on any input.
    """
    # Only the first usable "@" per line matters: any dot that fits a later
    # one also fits it
    for line in value.split("\n"):
        at = line.find("@", 3)
        if at != -1 and line.rfind(".", at + 4, len(line) - 2) != -1:
            return True
    return False


def _check_name(value: str) -> list[str]:
    messages = []
    if not NAME_PATTERN.fullmatch(value):
        messages.append(INVALID_FORMAT)
    if len(value) > NAME_MAX_LENGTH:
        messages.append(too_long(NAME_MAX_LENGTH))
    return messages


def _check_email(value: str) -> list[str]:
    messages = []
    if not email_format_ok(value):
        messages.append(INVALID_FORMAT)
    if len(value) < EMAIL_MIN_LENGTH:
        messages.append(too_short(EMAIL_MIN_LENGTH))
    elif len(value) > EMAIL_MAX_LENGTH:
        messages.append(too_long(EMAIL_MAX_LENGTH))
    return messages


def _check_password(value: str) -> list[str]:
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return [too_long(BCRYPT_MAX_BYTES, "byte")]
    return []


CHECKS = {
    "name": _check_name,
    "email": _check_email,
    "password": _check_password,
}


def _validate(fields: Mapping[str, Any], allowed: tuple, required: tuple) -> ValidationResult:
    result = ValidationResult()

    for name in allowed:
        present = name in fields
        raw = fields.get(name)

        if not is_scalar(raw):
            result.add_error(name, INVALID)
            continue
        value = _as_text(raw)

        if name == "balance":
            # Opaque text; blank means "not supplied"
            if not is_blank(value):
                result.changes[name] = value
            continue

        if name not in required and not present:
            continue

        if is_blank(value):
            result.add_error(name, BLANK)
            continue

        check = CHECKS.get(name)
        for message in (check(value) if check else []):
            result.add_error(name, message)
        result.changes[name] = value

    if result.errors:
        result.changes = {}
    return result


def validate_user_create(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Validate a create field-set. name, email, password and address are
    required; balance is optional and defaults to "0.00000".
    """
    result = _validate(fields, CREATE_FIELDS, REQUIRED_ON_CREATE)
    if result.valid:
        result.changes.setdefault("balance", DEFAULT_BALANCE)
    return result


def validate_user_update(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Validate an update field-set. Only keys that are present are checked,
    and only name/email/address/balance can ever be accepted. Anything else
    (password, password_hash, id, timestamps) is dropped here.
    """
    return _validate(fields, UPDATE_FIELDS, required=())


def validate_account_create(fields: Mapping[str, Any]) -> ValidationResult:
    """
    Validate an account field-set: a required user_id and an optional,
    non-negative decimal balance.
    """
    result = ValidationResult()

    user_id = _as_text(fields.get("user_id"))
    if is_blank(user_id):
        result.add_error("user_id", BLANK)
    elif not DIGITS_PATTERN.fullmatch(user_id.strip()):
        result.add_error("user_id", INVALID)
    else:
        result.changes["user_id"] = int(user_id)

    raw_balance = fields.get("balance")
    if is_blank(_as_text(raw_balance)):
        result.changes["balance"] = parse_decimal(DEFAULT_BALANCE)
    else:
        balance = parse_decimal(raw_balance)
        if balance is None:
            result.add_error("balance", INVALID)
        elif balance < 0:
            result.add_error("balance", INSUFFICIENT_FUNDS)
        else:
            result.changes["balance"] = balance

    if result.errors:
        result.changes = {}
    return result

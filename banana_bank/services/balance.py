"""
banana_bank/services/balance.py

Display formatting for stored balances.

Balances are stored as exact text (e.g. "123.45678"). For JSON output they
are shown as a number with at most 2 fractional digits:

 - user balances are truncated with floor(value * 100) / 100, so they never
   round up: "999.999" shows as 999.99
 - account balances are rounded half-up to the cent: "10.12999" shows as 10.13

The arithmetic is done in Decimal so values like "0.29" don't lose a cent
through binary floating point.
"""

import math
from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP, localcontext

HUNDRED = Decimal(100)
CENT = Decimal("0.01")


def parse_decimal(raw) -> Decimal | None:
    """
    Parse raw input into a finite Decimal, or None if it isn't one.
    Parsing is strict: "12abc" is not a number.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (ArithmeticError, ValueError):
        return None
    return value if value.is_finite() else None


def _to_display(stored, convert) -> float:
    value = parse_decimal(stored)
    if value is None:
        return 0.0

    # Overflow and friends give Infinity/NaN instead of raising
    with localcontext() as ctx:
        for signal in list(ctx.traps):
            ctx.traps[signal] = False
        try:
            number = float(convert(value))
        except (ArithmeticError, ValueError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def format_balance(stored) -> float:
    """
    Convert a stored user balance into a display number.

    Anything that does not parse as a finite decimal (None, "", "invalid",
    "NaN", ...) or is too large to show as a JSON number ("1e400") is shown
    as 0.0. Never raises.
    """
    return _to_display(
        stored,
        lambda value: (value * HUNDRED).to_integral_value(rounding=ROUND_FLOOR) / HUNDRED,
    )


def round_balance(stored) -> float:
    """
    Convert a stored account balance into a display number, rounded
    half-up to 2 decimals. Same fallbacks as format_balance.
    """
    return _to_display(stored, lambda value: value.quantize(CENT, rounding=ROUND_HALF_UP))

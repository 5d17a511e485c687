"""
Module: ledger_kernel.db.types
Responsibility: Money representation and the only sanctioned conversion and
    rounding helpers for monetary values.
Architecture position: Kernel > DB.  May be imported by models/, domain/,
    services/, selectors/ and outer layers.  MUST NOT import from any of those.

Invariants enforced:
    - Amounts are persisted as integer minor units (cents).  Equality of
      debit and credit sums is therefore exact at the storage layer.
    - In Python, amounts are always Decimal.  No floats anywhere: a float
      cannot represent 0.10 exactly, so floats are refused at the boundary.
    - round_money() is the ONLY rounding function, and it is applied at
      presentation time only, never while accumulating balances.

Failure modes:
    - InvalidOperation / ValueError on non-numeric input to to_decimal().
    - ValueError from to_minor_units() when the amount has more fractional
      digits than the minor unit allows.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Annotated

from sqlalchemy import BigInteger, String

# Amount in minor units (cents)
MinorUnits = Annotated[int, BigInteger]

# Short identifier strings (account codes)
ShortCode = Annotated[str, String(50)]

# Long text for descriptions
LongText = Annotated[str, String(4000)]

# Minor units per major unit: 2 decimal places (cents)
MONEY_DECIMAL_PLACES = 2
DEFAULT_ROUNDING = ROUND_HALF_UP

ZERO = Decimal("0")


def to_decimal(value: Decimal | int | str) -> Decimal:
    """
    Convert a caller-supplied amount into a finite Decimal.

    Floats and booleans are rejected outright.

    Raises:
        ValueError: If the value is a float/bool, not numeric, or not finite.
    """
    if isinstance(value, (bool, float)):
        raise ValueError(f"Amount must be Decimal, int or str, not {type(value).__name__}")
    try:
        result = Decimal(value) if not isinstance(value, Decimal) else value
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Amount is not numeric: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Amount is not finite: {value!r}")
    return result


def to_minor_units(amount: Decimal, decimal_places: int = MONEY_DECIMAL_PLACES) -> int:
    """
    Convert a Decimal amount into integer minor units without rounding.

    Example:
        to_minor_units(Decimal("10.50")) -> 1050

    Raises:
        ValueError: If the amount carries precision finer than one minor unit.
    """
    scaled = amount.scaleb(decimal_places)
    if scaled != scaled.to_integral_value():
        raise ValueError(
            f"Amount {amount} has more than {decimal_places} decimal places"
        )
    return int(scaled)


def money_from_int(value: int, decimal_places: int = MONEY_DECIMAL_PLACES) -> Decimal:
    """
    Create a Money value from integer minor units.

    Example:
        money_from_int(1050, 2) -> Decimal("10.50")
    """
    return Decimal(value).scaleb(-decimal_places)


def round_money(
    value: Decimal,
    decimal_places: int = MONEY_DECIMAL_PLACES,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to the given number of decimal places.

    This is the ONLY sanctioned rounding function for financial values.
    Use it for presentation; balances are accumulated unrounded.
    """
    quantize_str = "0." + "0" * decimal_places if decimal_places > 0 else "1"
    return value.quantize(Decimal(quantize_str), rounding=rounding)


def format_money(value: Decimal, decimal_places: int = MONEY_DECIMAL_PLACES) -> str:
    """Render a monetary value as a fixed-point string, e.g. ``"10000.00"``."""
    return f"{round_money(value, decimal_places):f}"

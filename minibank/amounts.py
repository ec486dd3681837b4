"""
Monetary Amount Handling

Coerces caller-supplied amounts to Decimal and rounds them with
ROUND_HALF_UP. NEVER uses float arithmetic for monetary values: floats are
converted through their string form before any calculation.

Balances stay exact. Balance arithmetic runs in EXACT_CONTEXT, where a
result that would need rounding raises decimal.Inexact instead of silently
dropping digits. Interest is computed in the wider ROUNDING_CONTEXT so the
only rounding applied is the final one to cents.
"""

from decimal import (
    Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow,
    ROUND_HALF_UP, localcontext
)
from typing import Any, Union

AmountLike = Union[Decimal, int, str, float]

MONEY_SCALE = 2      # cents
RATE_SCALE = 10      # fractional digits carried by derived rates
MONTHS_PER_YEAR = Decimal("12")

# Significant digits an amount or balance may carry
MONEY_PRECISION = 60

EXACT_CONTEXT = Context(
    prec=MONEY_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact],
)

# balance * monthly rate needs at most MONEY_PRECISION + RATE_SCALE + 1 digits
ROUNDING_CONTEXT = Context(
    prec=2 * MONEY_PRECISION,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """
    Convert a caller-supplied amount to Decimal

    Args:
        value: Decimal, int, float or numeric string

    Returns:
        Finite Decimal value of at most MONEY_PRECISION significant digits

    Raises:
        TypeError: If value is None, a bool or an unsupported type
        ValueError: If value cannot be parsed, is not finite or carries
            more than MONEY_PRECISION significant digits
    """
    if value is None:
        raise TypeError("Amount cannot be None")
    # bool is an int subclass; True is not a sum of money
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Amount cannot be empty")
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Cannot convert '{value}' to Decimal") from None
    else:
        raise TypeError(f"Unsupported amount type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    if len(result.as_tuple().digits) > MONEY_PRECISION:
        raise ValueError(
            f"Amount has more than {MONEY_PRECISION} significant digits"
        )
    return result


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    """
    Add two amounts without rounding

    Raises:
        decimal.Inexact: If the sum needs more than MONEY_PRECISION digits
    """
    with localcontext(EXACT_CONTEXT):
        return a + b


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    """
    Subtract two amounts without rounding

    Raises:
        decimal.Inexact: If the difference needs more than MONEY_PRECISION digits
    """
    with localcontext(EXACT_CONTEXT):
        return a - b


def quantize(value: Decimal, places: int) -> Decimal:
    """Round to a fixed number of fractional digits, half up"""
    with localcontext(ROUNDING_CONTEXT):
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half up"""
    return quantize(value, MONEY_SCALE)


def monthly_rate(annual_rate: Decimal) -> Decimal:
    """
    Convert an annual rate to a monthly one

    The result carries RATE_SCALE fractional digits so repeated accruals do
    not drift before the final rounding to cents.
    """
    with localcontext(ROUNDING_CONTEXT):
        return quantize(annual_rate / MONTHS_PER_YEAR, RATE_SCALE)


def monthly_interest(balance: Decimal, annual_rate: Decimal) -> Decimal:
    """
    One month of interest on a balance, rounded half up to cents

    Raises:
        decimal.InvalidOperation: If the rounded interest needs more digits
            than ROUNDING_CONTEXT holds
    """
    with localcontext(ROUNDING_CONTEXT):
        return round_money(balance * monthly_rate(annual_rate))

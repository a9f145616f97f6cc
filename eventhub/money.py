"""
Money Utilities - Decimal operations for ticket prices.

Prices arrive from the events API as JSON numbers; they are converted to
Decimal once at the model boundary and stay Decimal through totals.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

MONEY_PRECISION = Decimal("0.01")

DEFAULT_CURRENCY = "KES"

Amount = Union[str, int, float, Decimal, None]


def to_decimal(value: Amount) -> Decimal:
    """
    Convert any value to Decimal safely.

    Args:
        value: Value to convert (str, int, float, Decimal, or None)

    Returns:
        Decimal representation of the value, or Decimal("0") if None/invalid
    """
    if value is None:
        return Decimal("0")

    if isinstance(value, Decimal):
        return value

    try:
        # Go through str so 0.1 stays 0.1
        if isinstance(value, float):
            return Decimal(str(value))
        return Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")


def parse_decimal(value: Amount) -> Decimal:
    """
    Strict conversion for amounts coming from outside.

    Raises:
        ValueError: None, booleans, non-numeric text, NaN or infinity
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Amount is required")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        raise ValueError(f"Invalid amount: {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def round_money(value: Amount) -> Decimal:
    """Round a monetary value to 2 decimal places."""
    return to_decimal(value).quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def multiply(value: Amount, factor: Amount) -> Decimal:
    """Safe multiplication of monetary value by a factor."""
    return to_decimal(value) * to_decimal(factor)


def to_float(value: Amount) -> float:
    """
    Convert Decimal to float for JSON responses.

    Use only at API boundaries, not for internal calculations.
    """
    return float(to_decimal(value))


def format_money(value: Amount, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Format a monetary value with its currency code.

    Example: format_money(1500) -> "KES 1,500.00"
    """
    return f"{currency} {round_money(value):,.2f}"

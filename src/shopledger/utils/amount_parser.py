"""Amount and quantity parsing utilities.

Payloads may carry money as numbers or strings ("1,250.00", "$40", "(15)").
Strict parsers raise ValueError; the ``coerce_*`` variants fall back to a
default, matching how purchase lines treat missing or non-numeric values.
"""

from decimal import Decimal, InvalidOperation
from typing import Any
import re

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥₹]")

# Largest count a 64-bit INTEGER column can hold
MAX_QUANTITY = 2**63 - 1


def parse_amount(value: Any) -> Decimal:
    """Parse a money value into a Decimal.

    Handles various formats:
    - 123.45 (int, float or Decimal)
    - "123.45", "$123.45", "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        value: Amount as number or string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Could not parse amount {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # Go through str so 0.1 stays 0.1
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = _parse_amount_string(value)
    else:
        raise ValueError(f"Could not parse amount {value!r}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount {value!r}")
    return amount


def _parse_amount_string(amount_str: str) -> Decimal:
    text = amount_str.strip()
    if not text:
        raise ValueError("Empty amount string")

    is_negative = False
    if text.startswith("(") and text.endswith(")"):
        is_negative = True
        text = text[1:-1]

    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    return -amount if is_negative else amount


def coerce_amount(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    """Parse a money value, returning ``default`` when missing or malformed."""
    try:
        return parse_amount(value)
    except ValueError:
        return default


def parse_quantity(value: Any) -> int:
    """Parse an item quantity into an int.

    Accepts ints, integral floats/Decimals and numeric strings ("3", "3.0").

    Raises:
        ValueError: If the value is not a whole number or is out of range
    """
    amount = parse_amount(value)
    if amount != amount.to_integral_value():
        raise ValueError(f"Quantity must be a whole number, got {value!r}")
    if abs(amount) > MAX_QUANTITY:
        raise ValueError(f"Quantity {value!r} is out of range")
    return int(amount)


def coerce_quantity(value: Any, default: int = 0) -> int:
    """Parse a quantity, returning ``default`` when missing or malformed."""
    try:
        return parse_quantity(value)
    except ValueError:
        return default

"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENT = Decimal("0.01")

# Largest amount a journal line can carry; stored as whole cents in a 64-bit column
MAX_AMOUNT = Decimal("9999999999999999.99")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "$123.45", "1,234.56" and "(123.45)" (negative in
    parentheses).

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥]", "", amount_str).replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def to_amount(value) -> Decimal:
    """Coerce a wire value (number, numeric string, Decimal or None) to cents.

    None counts as zero. Floats go through ``str`` so 0.1 stays 0.1.
    Booleans are rejected even though they are ints.

    Raises:
        ValueError: If the value is not a finite number or is larger than
            MAX_AMOUNT
    """
    if value is None:
        return Decimal("0.00")
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = parse_amount(value)
    else:
        raise ValueError(f"Invalid amount {value!r}")
    if not amount.is_finite():
        raise ValueError(f"Invalid amount {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount {value!r} exceeds the maximum of {MAX_AMOUNT}")
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Invalid amount {value!r}")

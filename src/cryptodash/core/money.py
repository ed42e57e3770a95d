"""Decimal helpers for prices and money amounts."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from cryptodash.core.exceptions import ValidationError

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
SATOSHI = Decimal("0.00000001")

# Finest unit user input may carry (wei)
MAX_DECIMAL_PLACES = 18


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal via its string form.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary expansion.
    Raises ValidationError for NaN, infinity and unparseable input.
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid numeric value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid numeric value: {value!r}")
    if not result.is_finite():
        raise ValidationError(f"Invalid numeric value: {value!r}")
    return result


def to_decimal_or_none(value: Optional[Number]) -> Optional[Decimal]:
    """Like to_decimal, but None and non-finite values become None."""
    if value is None:
        return None
    try:
        return to_decimal(value)
    except ValidationError:
        return None


def quantize_money(value: Decimal) -> Decimal:
    """Round a money amount to cents."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_price(value: Decimal) -> Decimal:
    """Round a unit price: cents at or above 1, eight places below 1."""
    if abs(value) >= 1:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    return value.quantize(SATOSHI, rounding=ROUND_HALF_UP)


def quantize_pct(value: Decimal) -> Decimal:
    """Round a percentage to two places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def strip_zeros(value: Decimal) -> Decimal:
    """Drop trailing zeros left by fixed-scale columns without switching to exponent form."""
    normalized = value.normalize()
    if normalized.as_tuple().exponent > 0:
        return normalized.quantize(Decimal("1"))
    return normalized


def decimal_places(value: Decimal) -> int:
    """Number of significant digits after the decimal point."""
    exponent = value.normalize().as_tuple().exponent
    return -exponent if exponent < 0 else 0

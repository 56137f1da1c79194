from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

DECIMAL_ZERO = Decimal("0.00")
DECIMAL_HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str, None]


def to_decimal(val: Number) -> Decimal:
    """Convert a loosely typed number (JSON payloads, aggregates) into Decimal.

    ``None`` and unparsable values become zero.
    """
    if val is None:
        return Decimal("0")
    if isinstance(val, Decimal):
        return val
    try:
        return Decimal(str(val))
    except (InvalidOperation, ValueError):
        return Decimal("0")


def is_decimal(val: Number) -> bool:
    """Whether ``val`` parses as a finite Decimal."""
    if val is None or isinstance(val, bool):
        return False
    try:
        return Decimal(str(val)).is_finite()
    except (InvalidOperation, ValueError):
        return False


def quantize_decimal(val: Number) -> Decimal:
    if val is None:
        return DECIMAL_ZERO
    if not isinstance(val, Decimal):
        val = Decimal(str(val))
    return val.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def percent_of(base: Number, percent: Number) -> Decimal:
    """Return ``percent`` % of ``base`` rounded to cents."""
    return quantize_decimal(to_decimal(base) * to_decimal(percent) / DECIMAL_HUNDRED)

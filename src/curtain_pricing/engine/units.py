"""
Length unit conversion.

All engine computation happens in centimeters (and meters derived from
them). Values are converted without rounding; rounding is applied only to
the output fields of a finalized line item.
"""
import math
from decimal import Decimal
from numbers import Real
from typing import Any

from .errors import InvalidInput
from .models import LengthUnit


CM_PER_UNIT = {
    LengthUnit.CENTIMETER: 1,
    LengthUnit.METER: 100,
    LengthUnit.INCH: 2.54,
    LengthUnit.FOOT: 30.48,
}


def to_centimeters(value: Any, unit: Any) -> float:
    """
    Convert a positive length to centimeters.

    Args:
        value: Finite positive number
        unit: LengthUnit or a recognized unit name

    Returns:
        The length in centimeters, unrounded

    Raises:
        InvalidInput: value is not a finite positive number or unit is unknown
    """
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise InvalidInput(f"Length must be a number, got {value!r}", field="length")
    try:
        length = float(value)
    except (OverflowError, ValueError):
        raise InvalidInput(f"Length must be a finite positive number, got {value!r}", field="length")
    if not math.isfinite(length) or length <= 0:
        raise InvalidInput(f"Length must be a finite positive number, got {value!r}", field="length")

    return length * CM_PER_UNIT[LengthUnit.parse(unit)]

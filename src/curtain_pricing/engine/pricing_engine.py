"""
Pricing Engine - Line-item cost computation.

Turns a draft LineItemRequest into a finalized LineItem:
- Validates every request field before any arithmetic happens
- Converts the raw length to centimeters
- Applies the curtain (hem + stitching) or plain yardage formula
- Rounds the three output fields half-up to 2 decimal places
- Snapshots the fabric name and design code into the result

The engine is a pure function of its inputs. Fabric and ShopSettings are
passed in on every call; nothing is read from global state.
"""
import logging
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from numbers import Real
from typing import Any, Optional

from .errors import ValidationError
from .models import Fabric, ItemType, LineItem, LineItemRequest, ShopSettings
from .units import to_centimeters

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def round_half_up(value: float, places: Decimal = CENT) -> float:
    """
    Round on the decimal representation of value, halves away from zero.

    Non-finite values are returned unchanged.
    """
    number = Decimal(repr(float(value)))
    if not number.is_finite():
        return float(value)
    with localcontext() as ctx:
        # Enough digits for every integer digit plus the requested places
        ctx.prec = max(ctx.prec, number.adjusted() - places.as_tuple().exponent + 2)
        return float(number.quantize(places, rounding=ROUND_HALF_UP))


def _parse_number(value: Any) -> Optional[float]:
    """Coerce a numeric value or numeric string to float, None if not a number."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, (Real, Decimal)):
            return float(value)
        if isinstance(value, str):
            return float(Decimal(value.strip()))
    except (InvalidOperation, OverflowError, ValueError):
        return None
    return None


def _validate_length(value: Any) -> float:
    length = _parse_number(value)
    if length is None:
        raise ValidationError("length", f"Length must be a number, got {value!r}")
    if not math.isfinite(length) or length <= 0:
        raise ValidationError("length", f"Length must be a positive number, got {value!r}")
    return length


def _validate_quantity(value: Any) -> int:
    quantity = None
    if isinstance(value, bool):
        quantity = None
    elif isinstance(value, int):
        quantity = value
    elif isinstance(value, float) and value.is_integer():
        quantity = int(value)
    elif isinstance(value, str) and value.strip().lstrip("+-").isdigit():
        quantity = int(value.strip())

    if quantity is None:
        raise ValidationError("quantity", f"Quantity must be a whole number, got {value!r}")
    if quantity <= 0:
        raise ValidationError("quantity", f"Quantity must be positive, got {value!r}")
    return quantity


def _validate_item_type(value: Any) -> ItemType:
    try:
        return ItemType(value.strip().lower() if isinstance(value, str) else value)
    except ValueError:
        raise ValidationError("item_type", f"Item type must be 'curtain' or 'other', got {value!r}")


def _validate_non_negative(field: str, value: Any) -> float:
    number = _parse_number(value)
    if number is None or not math.isfinite(number) or number < 0:
        raise ValidationError(field, f"{field} must be a non-negative number, got {value!r}")
    return number


def compute_line_item(
    request: LineItemRequest,
    fabric: Optional[Fabric],
    settings: Optional[ShopSettings],
) -> LineItem:
    """
    Price a single draft line item.

    Args:
        request: Draft line item with raw length/unit/quantity
        fabric: Catalog fabric the request refers to (None if not found)
        settings: Current shop settings

    Returns:
        Finalized LineItem with rounded length, fabric usage and cost

    Raises:
        ValidationError: a request field, the fabric or the settings are invalid
        InvalidInput: the length unit is not recognized
    """
    if fabric is None:
        raise ValidationError("fabric", f"Fabric {request.fabric_id!r} not found")
    if fabric.id != request.fabric_id:
        raise ValidationError(
            "fabric_id",
            f"Fabric {fabric.id} does not match requested fabric {request.fabric_id!r}",
        )
    price_per_meter = _validate_non_negative("price_per_meter", fabric.price_per_meter)

    length = _validate_length(request.length)
    quantity = _validate_quantity(request.quantity)
    item_type = _validate_item_type(request.item_type)

    if settings is None:
        raise ValidationError("settings", "Shop settings are required")
    stitching_price = _validate_non_negative("stitching_price", settings.stitching_price)
    extra_hem_cm = _validate_non_negative("extra_hem_cm", settings.extra_hem_cm)

    length_cm = to_centimeters(length, request.unit)
    if not math.isfinite(length_cm):
        raise ValidationError("length", f"Length is too large, got {request.length!r}")

    try:
        if item_type is ItemType.CURTAIN:
            fabric_used_m = quantity * ((length_cm + extra_hem_cm) / 100)
            cost = fabric_used_m * price_per_meter + quantity * stitching_price
        else:
            fabric_used_m = (length_cm * quantity) / 100
            cost = fabric_used_m * price_per_meter
    except OverflowError:
        raise ValidationError("quantity", f"Quantity is too large, got {request.quantity!r}")
    if not (math.isfinite(fabric_used_m) and math.isfinite(cost)):
        raise ValidationError("length", "Length and quantity are too large to price")

    item = LineItem(
        fabric_id=fabric.id,
        fabric_name=str(fabric.name),
        design_code=str(fabric.design_code),
        item_type=item_type,
        length_cm=round_half_up(length_cm),
        quantity=quantity,
        fabric_used_m=round_half_up(fabric_used_m),
        cost=round_half_up(cost),
    )
    logger.debug(
        "Priced %s %s: %s cm x %d -> %s m, cost %.2f",
        item_type.value, item.design_code, item.length_cm, quantity,
        item.fabric_used_m, item.cost,
    )
    return item

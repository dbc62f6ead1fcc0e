"""
Data models for the pricing engine.

Uses dataclasses for structured, type-safe data representation. Finalized
line items and draft orders are frozen so a priced item can never drift
away from the fabric price it was computed with.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .errors import InvalidInput


class LengthUnit(str, Enum):
    """Units a length can be measured in."""
    CENTIMETER = "cm"
    METER = "meter"
    INCH = "inch"
    FOOT = "feet"

    @classmethod
    def parse(cls, value: Any) -> 'LengthUnit':
        """Resolve a unit from an enum member, its value, or a common alias."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            unit = _UNIT_ALIASES.get(value.strip().lower())
            if unit is not None:
                return unit
        raise InvalidInput(f"Unrecognized length unit: {value!r}", field="unit")


_UNIT_ALIASES = {
    "cm": LengthUnit.CENTIMETER,
    "centimeter": LengthUnit.CENTIMETER,
    "centimeters": LengthUnit.CENTIMETER,
    "m": LengthUnit.METER,
    "meter": LengthUnit.METER,
    "meters": LengthUnit.METER,
    "in": LengthUnit.INCH,
    "inch": LengthUnit.INCH,
    "inches": LengthUnit.INCH,
    "ft": LengthUnit.FOOT,
    "foot": LengthUnit.FOOT,
    "feet": LengthUnit.FOOT,
}


class ItemType(str, Enum):
    """How a line item is billed."""
    CURTAIN = "curtain"  # hem allowance + stitching per piece
    OTHER = "other"  # plain yardage


@dataclass
class Fabric:
    """A catalog fabric. Prices are per linear meter."""
    id: int
    name: str
    design_code: str
    price_per_meter: float

    @property
    def label(self) -> str:
        return f"{self.design_code} ({self.price_per_meter:.2f}/m)"


@dataclass(frozen=True)
class ShopSettings:
    """Shop-wide tunables that only affect curtain items."""
    stitching_price: float = 0.0
    extra_hem_cm: float = 0.0


@dataclass
class LineItemRequest:
    """
    A draft line item as entered by the user.

    length and quantity are kept raw (they may still be form strings);
    the engine validates and converts them.
    """
    fabric_id: int
    item_type: Any
    length: Any
    unit: Any = LengthUnit.CENTIMETER
    quantity: Any = 1


@dataclass(frozen=True)
class LineItem:
    """A finalized, priced line item."""
    fabric_id: int
    fabric_name: str
    design_code: str
    item_type: ItemType
    length_cm: float
    quantity: int
    fabric_used_m: float
    cost: float

    @property
    def description(self) -> str:
        return f"{self.design_code} ({self.fabric_name})"

    def to_dict(self) -> dict:
        """Flat dict in the shape the order store persists."""
        return {
            "fabric_id": self.fabric_id,
            "fabric_name": self.fabric_name,
            "design_code": self.design_code,
            "item_type": self.item_type.value,
            "length_cm": self.length_cm,
            "quantity": self.quantity,
            "fabric_used_m": self.fabric_used_m,
            "cost": self.cost,
        }


@dataclass(frozen=True)
class Customer:
    """Customer contact fields captured with an order."""
    name: str = ""
    phone: str = ""
    address: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class DraftOrder:
    """An order being built in memory. The total is always derived."""
    customer: Customer = field(default_factory=Customer)
    items: tuple[LineItem, ...] = ()

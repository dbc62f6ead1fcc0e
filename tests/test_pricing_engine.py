"""
Line-item pricing tests.

Covers the curtain and plain yardage formulas, rounding of the output
fields, request validation and the fabric snapshot.
"""
from decimal import Decimal

import pytest

from curtain_pricing.engine import (
    Fabric,
    InvalidInput,
    ItemType,
    LengthUnit,
    LineItemRequest,
    ShopSettings,
    ValidationError,
    compute_line_item,
    round_half_up,
)


@pytest.fixture
def fabric():
    return Fabric(id=7, name="Velvet", design_code="VL-101", price_per_meter=10.00)


@pytest.fixture
def settings():
    return ShopSettings(stitching_price=5.00, extra_hem_cm=10)


def make_request(**overrides):
    values = dict(fabric_id=7, item_type="curtain", length=100, unit=LengthUnit.CENTIMETER, quantity=2)
    values.update(overrides)
    return LineItemRequest(**values)


def test_curtain_formula(fabric, settings):
    """2 pieces of 100 cm + 10 cm hem at 10.00/m plus 5.00 stitching each."""
    item = compute_line_item(make_request(), fabric, settings)

    assert item.item_type is ItemType.CURTAIN
    assert item.length_cm == 100
    assert item.quantity == 2
    assert item.fabric_used_m == 2.2
    assert item.cost == 32.00


def test_other_formula(fabric, settings):
    """2 m x 3 of plain yardage: no hem, no stitching."""
    request = make_request(item_type="other", length=2, unit=LengthUnit.METER, quantity=3)
    item = compute_line_item(request, fabric, settings)

    assert item.item_type is ItemType.OTHER
    assert item.length_cm == 200
    assert item.fabric_used_m == 6.0
    assert item.cost == 60.00


def test_curtain_stitching_is_per_piece(fabric):
    settings = ShopSettings(stitching_price=12.5, extra_hem_cm=0)
    one = compute_line_item(make_request(quantity=1), fabric, settings)
    four = compute_line_item(make_request(quantity=4), fabric, settings)

    assert one.cost == 22.50
    assert four.cost == 90.00


def test_free_fabric_curtain_costs_only_stitching(settings):
    free = Fabric(id=7, name="Remnant", design_code="RM-1", price_per_meter=0)
    item = compute_line_item(make_request(quantity=3), free, settings)

    assert item.cost == 15.00
    assert item.fabric_used_m == 3.3


def test_inch_length_is_rounded_to_two_places(fabric, settings):
    request = make_request(item_type="other", length=33.3, unit=LengthUnit.INCH, quantity=1)
    item = compute_line_item(request, fabric, settings)

    # 33.3 in = 84.582 cm
    assert item.length_cm == 84.58
    assert item.fabric_used_m == 0.85
    assert item.cost == 8.46


def test_rounding_is_half_up():
    assert round_half_up(2.675) == 2.68
    assert round_half_up(0.125) == 0.13
    assert round_half_up(1.005) == 1.01
    assert round_half_up(32.000000000000004) == 32.0


def test_rounding_happens_only_on_outputs(settings):
    """Cost uses the unrounded fabric usage, not the rounded one."""
    fabric = Fabric(id=7, name="Linen", design_code="LN-1", price_per_meter=100)
    request = make_request(item_type="other", length=1, unit=LengthUnit.INCH, quantity=1)
    item = compute_line_item(request, fabric, settings)

    # 2.54 cm -> 0.0254 m, rounded 0.03; cost from the unrounded value is 2.54
    assert item.fabric_used_m == 0.03
    assert item.cost == 2.54


def test_form_strings_are_accepted(fabric, settings):
    request = make_request(length=" 100 ", quantity="2", unit="cm", item_type="Curtain")
    item = compute_line_item(request, fabric, settings)
    assert item.cost == 32.00


def test_snapshot_survives_fabric_price_change(fabric, settings):
    item = compute_line_item(make_request(), fabric, settings)

    fabric.price_per_meter = 99.0
    fabric.name = "Renamed"
    fabric.design_code = "XX-000"

    assert item.cost == 32.00
    assert item.fabric_name == "Velvet"
    assert item.design_code == "VL-101"


def test_line_item_is_frozen(fabric, settings):
    item = compute_line_item(make_request(), fabric, settings)
    with pytest.raises(AttributeError):
        item.cost = 0


@pytest.mark.parametrize("length", [
    0, -10, "abc", "", None, float("nan"), float("inf"), True,
    10**400, Decimal("sNaN"), "sNaN", "1e400",
])
def test_rejects_bad_length(fabric, settings, length):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(length=length), fabric, settings)
    assert exc_info.value.field == "length"


@pytest.mark.parametrize("quantity", [0, -1, 2.5, "1.5", "two", "", None, False])
def test_rejects_bad_quantity(fabric, settings, quantity):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(quantity=quantity), fabric, settings)
    assert exc_info.value.field == "quantity"


def test_rejects_unknown_fabric(settings):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(fabric_id=999), None, settings)
    assert exc_info.value.field == "fabric"


def test_rejects_mismatched_fabric(fabric, settings):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(fabric_id=8), fabric, settings)
    assert exc_info.value.field == "fabric_id"


def test_rejects_negative_fabric_price(settings):
    bad = Fabric(id=7, name="Velvet", design_code="VL-101", price_per_meter=-1)
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(), bad, settings)
    assert exc_info.value.field == "price_per_meter"


def test_rejects_missing_settings(fabric):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(), fabric, None)
    assert exc_info.value.field == "settings"


def test_rejects_negative_hem(fabric):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(), fabric, ShopSettings(stitching_price=5, extra_hem_cm=-20))
    assert exc_info.value.field == "extra_hem_cm"


def test_rejects_unknown_item_type(fabric, settings):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(item_type="blind"), fabric, settings)
    assert exc_info.value.field == "item_type"


def test_rejects_unknown_unit(fabric, settings):
    with pytest.raises(InvalidInput):
        compute_line_item(make_request(unit="yard"), fabric, settings)


def test_rounding_very_large_values():
    assert round_half_up(1e29) == 1e29
    assert round_half_up(123456789012345678901234567.895) == pytest.approx(1.2345678901234568e26)
    assert round_half_up(float("inf")) == float("inf")


def test_very_long_length_is_priced(fabric, settings):
    request = make_request(item_type="other", length=1e27, unit=LengthUnit.METER, quantity=1)
    item = compute_line_item(request, fabric, settings)

    assert item.length_cm == pytest.approx(1e29)
    assert item.fabric_used_m == pytest.approx(1e27)
    assert item.cost == pytest.approx(1e28)


def test_length_overflowing_after_conversion(fabric, settings):
    request = make_request(length=1e307, unit=LengthUnit.METER)
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(request, fabric, settings)
    assert exc_info.value.field == "length"


@pytest.mark.parametrize("item_type", ["curtain", "other"])
def test_quantity_too_large_to_price(fabric, settings, item_type):
    with pytest.raises(ValidationError) as exc_info:
        compute_line_item(make_request(item_type=item_type, quantity=10**400), fabric, settings)
    assert exc_info.value.field == "quantity"


def test_unknown_unit_names_the_field(fabric, settings):
    with pytest.raises(InvalidInput) as exc_info:
        compute_line_item(make_request(unit="yard"), fabric, settings)
    assert exc_info.value.field == "unit"

# testing/test_estimator.py

import pytest

from stl_quote.core.common_types import BoundingBox, MeshProperties, StlEncoding
from stl_quote.core.exceptions import ValidationError
from stl_quote.core.utils import format_time, round_half_up, round_to_int
from stl_quote.processes.print_3d import estimator

def _bbox(width, height, depth) -> BoundingBox:
    return BoundingBox(max_x=width, max_y=height, max_z=depth, width=width, height=height, depth=depth)

def _props(volume_mm3, width, height, depth) -> MeshProperties:
    return MeshProperties(
        encoding=StlEncoding.BINARY, facet_count=12, bounding_box=_bbox(width, height, depth),
        volume_mm3=volume_mm3, volume_cm3=volume_mm3 / 1000,
    )

# --- Print Time ---

def test_print_time_formula():
    # length = 1000 / (10 * 10) = 10mm -> 0.25 min -> 0.25/60 h + 0.5 h
    hours = estimator.estimate_print_time_hours(1000.0, 10.0)
    assert hours == pytest.approx(0.25 / 60 + 0.5)

@pytest.mark.parametrize("volume, height", [(0.0, 10.0), (1000.0, 0.0), (0.0, 0.0)])
def test_print_time_zero_guards(volume, height):
    assert estimator.estimate_print_time_hours(volume, height) == 0.0

def test_print_time_ignores_layer_height():
    assert estimator.estimate_print_time_hours(5000.0, 20.0, 0.1) == estimator.estimate_print_time_hours(5000.0, 20.0, 0.3)

@pytest.mark.parametrize("layer_height", [0.0, -0.2])
def test_print_time_rejects_non_positive_layer_height(layer_height):
    with pytest.raises(ValidationError):
        estimator.estimate_print_time_hours(1000.0, 10.0, layer_height)

# --- Support Waste ---

@pytest.mark.parametrize("depth, expected", [
    (10.0, 5.0),   # ratio 1.0
    (15.0, 5.0),   # ratio 1.5 is not above 1.5
    (18.0, 10.0),  # ratio 1.8
    (20.0, 10.0),  # ratio 2.0 is not above 2.0
    (25.0, 15.0),  # ratio 2.5
])
def test_support_waste_steps(depth, expected):
    assert estimator.estimate_support_waste(_bbox(10.0, 10.0, depth)) == expected

def test_support_waste_uses_larger_footprint_side():
    # depth / max(4, 10) = 1.2
    assert estimator.estimate_support_waste(_bbox(4.0, 10.0, 12.0)) == 5.0
    # depth / max(4, 5) = 2.4
    assert estimator.estimate_support_waste(_bbox(4.0, 5.0, 12.0)) == 15.0

@pytest.mark.parametrize("depth", [0.0, 5.0])
def test_support_waste_zero_footprint_falls_back_to_base(depth):
    assert estimator.estimate_support_waste(_bbox(0.0, 0.0, depth)) == estimator.BASE_SUPPORT_WASTE_PERCENT

# --- Material Weight ---

def test_material_weight_uses_pla_density():
    assert estimator.estimate_material_weight(1000.0) == pytest.approx(1.24)
    assert estimator.estimate_material_weight(0.0) == 0.0
    assert estimator.estimate_material_weight(2000.0, density_g_cm3=1.0) == pytest.approx(2.0)

# --- Combined Estimate ---

def test_estimate_manufacturing_cube():
    est = estimator.estimate_manufacturing(_props(1000.0, 10.0, 10.0, 10.0))
    assert est.print_time_hours == pytest.approx(0.25 / 60 + 0.5)
    assert est.print_time_minutes == 30  # 30.25 min
    assert est.support_waste_percentage == 5.0
    assert est.material_weight_g == pytest.approx(1.24)
    assert est.support_weight_g == pytest.approx(1.24 * 0.05)
    assert est.layer_height_mm == estimator.DEFAULT_LAYER_HEIGHT_MM

def test_estimate_manufacturing_tall_part():
    est = estimator.estimate_manufacturing(_props(2500.0, 10.0, 10.0, 25.0))
    assert est.support_waste_percentage == 15.0
    assert est.support_weight_g == pytest.approx(2.5 * 1.24 * 0.15)

def test_estimate_manufacturing_empty_geometry():
    est = estimator.estimate_manufacturing(_props(0.0, 0.0, 0.0, 0.0))
    assert est.print_time_hours == 0.0
    assert est.print_time_minutes == 0
    assert est.support_waste_percentage == 5.0
    assert est.material_weight_g == 0.0
    assert est.support_weight_g == 0.0

# --- Rounding Helpers ---

@pytest.mark.parametrize("value, expected", [(0.125, 0.13), (2.675, 2.67), (1.005, 1.0), (46.2, 46.2), (-0.125, -0.13)])
def test_round_half_up(value, expected):
    # Ties are decided on the float's exact binary value, so 2.675 (2.67499...) rounds down
    assert round_half_up(value) == expected

@pytest.mark.parametrize("value, expected", [(288.75, 289), (184.8, 185), (2.5, 3), (2.4999, 2), (0.0, 0)])
def test_round_to_int(value, expected):
    assert round_to_int(value) == expected

@pytest.mark.parametrize("hours, expected", [(1.5, "1h 30m"), (0.0, "0m"), (2.0, "2h"), (0.5042, "30m"), (-1.0, "N/A"), (None, "N/A")])
def test_format_time(hours, expected):
    assert format_time(hours) == expected

@pytest.mark.parametrize("value", [1e26, 1e27, 1.5e300, -3.3e150, 1.7976931348623157e308])
def test_round_half_up_large_values(value):
    assert round_half_up(value) == value

# processes/print_3d/estimator.py

import logging

from ...core.common_types import BoundingBox, ManufacturingEstimate, MeshProperties
from ...core.exceptions import ValidationError
from ...core import utils

logger = logging.getLogger(__name__)

# Fixed business rules. These are coarse heuristics, reproduced as-is.
DEFAULT_LAYER_HEIGHT_MM = 0.2
NOMINAL_PRINT_SPEED_MM_PER_MIN = 40.0
SETUP_OVERHEAD_HOURS = 0.5
PLA_DENSITY_G_CM3 = 1.24

# (exclusive lower bound on depth/footprint ratio, support %), checked in order
SUPPORT_WASTE_STEPS = [(2.0, 15.0), (1.5, 10.0)]
BASE_SUPPORT_WASTE_PERCENT = 5.0

def estimate_print_time_hours(volume_mm3: float, height_mm: float,
                              layer_height_mm: float = DEFAULT_LAYER_HEIGHT_MM) -> float:
    """
    Estimates print time in hours from volume and build height.

    estimated_length = volume / (height * 10)
    minutes = estimated_length / 40 mm/min
    hours = minutes / 60 + 0.5h setup/travel overhead

    Zero volume or zero height gives exactly zero. The layer height is
    accepted for callers that vary it but does not enter the formula.
    """
    if layer_height_mm <= 0:
        raise ValidationError(f"Layer height must be positive, got {layer_height_mm}.")
    if volume_mm3 == 0 or height_mm == 0:
        return 0.0

    estimated_length = volume_mm3 / (height_mm * 10)
    time_minutes = estimated_length / NOMINAL_PRINT_SPEED_MM_PER_MIN
    return time_minutes / 60 + SETUP_OVERHEAD_HOURS

def estimate_support_waste(bounding_box: BoundingBox) -> float:
    """
    Support material waste as a percentage, from how tall the part is relative to its footprint.

    ratio = depth / max(width, height): above 2.0 -> 15%, above 1.5 -> 10%,
    otherwise 5%. A zero footprint leaves the ratio undefined and falls back to 5%.
    """
    footprint = max(bounding_box.width, bounding_box.height)
    if footprint == 0:
        return BASE_SUPPORT_WASTE_PERCENT

    ratio = bounding_box.depth / footprint
    for threshold, percentage in SUPPORT_WASTE_STEPS:
        if ratio > threshold:
            return percentage
    return BASE_SUPPORT_WASTE_PERCENT

def estimate_material_weight(volume_mm3: float, density_g_cm3: float = PLA_DENSITY_G_CM3) -> float:
    """Part weight in grams. The volume is taken to be in mm^3."""
    return (volume_mm3 / 1000.0) * density_g_cm3

def estimate_manufacturing(mesh_properties: MeshProperties,
                           layer_height_mm: float = DEFAULT_LAYER_HEIGHT_MM) -> ManufacturingEstimate:
    """Runs every estimate for a PLA print of the given geometry."""
    bbox = mesh_properties.bounding_box
    print_time_hours = estimate_print_time_hours(mesh_properties.volume_mm3, bbox.depth, layer_height_mm)
    support_pct = estimate_support_waste(bbox)
    material_weight_g = estimate_material_weight(mesh_properties.volume_mm3)
    support_weight_g = material_weight_g * (support_pct / 100)

    logger.info(f"Estimates: time={utils.format_time(print_time_hours)}, weight={material_weight_g:.2f}g, support={support_pct:.0f}%")
    return ManufacturingEstimate(
        print_time_hours=print_time_hours,
        print_time_minutes=utils.round_to_int(print_time_hours * 60),
        support_waste_percentage=support_pct,
        material_weight_g=material_weight_g,
        support_weight_g=support_weight_g,
        layer_height_mm=layer_height_mm,
    )

# processes/print_3d/__init__.py

# This file makes the 'print_3d' directory a Python sub-package.

from .processor import Print3DProcessor
from .estimator import (
    estimate_manufacturing,
    estimate_material_weight,
    estimate_print_time_hours,
    estimate_support_waste,
)
from .pricing import calculate_price, list_rates

__all__ = [
    "Print3DProcessor",
    "estimate_manufacturing",
    "estimate_material_weight",
    "estimate_print_time_hours",
    "estimate_support_waste",
    "calculate_price",
    "list_rates",
]

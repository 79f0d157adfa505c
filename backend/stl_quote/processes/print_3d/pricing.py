# processes/print_3d/pricing.py

import math
import numbers
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from ...core.common_types import PriceBreakdown, PriceQuote, RequesterCategory
from ...core.exceptions import ValidationError
from ...core.utils import round_half_up, round_to_int

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Rate:
    cost_per_gram: float
    discount_percentage: float = 0.0

RATE_TABLE: Dict[RequesterCategory, Rate] = {
    RequesterCategory.STUDENT: Rate(cost_per_gram=2.5),
    RequesterCategory.FACULTY: Rate(cost_per_gram=2.0, discount_percentage=20.0),
    RequesterCategory.GUEST: Rate(cost_per_gram=3.5),
}
DEFAULT_CATEGORY = RequesterCategory.GUEST

SUPPORT_MATERIAL_FRACTION = 0.10 # Support waste billed at 10% of material cost
SERVICE_CHARGE_FRACTION = 0.05

def resolve_category(category: Optional[Union[str, RequesterCategory]]) -> RequesterCategory:
    """
    Maps a requester category string onto RequesterCategory.

    Absent or empty means guest. Anything given that is not one of the three
    categories is rejected rather than silently priced as guest.
    """
    if category is None or category == "":
        return DEFAULT_CATEGORY
    if isinstance(category, RequesterCategory):
        return category
    if not isinstance(category, str):
        raise ValidationError(f"userType must be a string, got {type(category).__name__}.")
    try:
        return RequesterCategory(category.strip().lower())
    except ValueError:
        valid = ", ".join(c.value for c in RequesterCategory)
        raise ValidationError(f"userType must be one of: {valid}")

def _validate_grams(grams: Any) -> float:
    if grams is None:
        raise ValidationError("grams parameter is required")
    # bool is an int subclass; True grams is not a weight
    if isinstance(grams, bool) or not isinstance(grams, numbers.Real):
        raise ValidationError(f"grams must be a number, got {type(grams).__name__}.")
    if not math.isfinite(grams):
        raise ValidationError("grams must be a finite number")
    if grams < 0:
        raise ValidationError("grams must be a positive number")
    return float(grams)

def calculate_price(grams: Any, category: Optional[Union[str, RequesterCategory]] = None) -> PriceQuote:
    """
    Prices a print of `grams` of material for a requester category.

    material = grams * rate
    support = material * 0.10
    service = (material + support) * 0.05
    subtotal = material + support + service
    discount = subtotal * discount% / 100
    final = subtotal - discount

    Breakdown lines are rounded to 2 decimals; the headline cost is the final
    cost rounded to the nearest rupee.

    Raises:
        ValidationError: For missing/negative/non-numeric grams, grams too large to
                         price without overflow, or an unknown category.
    """
    grams = _validate_grams(grams)
    resolved = resolve_category(category)
    rate = RATE_TABLE[resolved]

    material_cost = grams * rate.cost_per_gram
    support_material_cost = material_cost * SUPPORT_MATERIAL_FRACTION
    service_charge = (material_cost + support_material_cost) * SERVICE_CHARGE_FRACTION
    subtotal = material_cost + support_material_cost + service_charge
    discount_amount = (subtotal * rate.discount_percentage) / 100
    final_cost = subtotal - discount_amount
    if not math.isfinite(final_cost):
        raise ValidationError(f"grams is too large to price: {grams}")

    breakdown = PriceBreakdown(
        grams=round_half_up(grams),
        user_type=resolved,
        cost_per_gram=rate.cost_per_gram,
        material_cost=round_half_up(material_cost),
        support_material_cost=round_half_up(support_material_cost),
        service_charge=round_half_up(service_charge),
        subtotal=round_half_up(subtotal),
        discount_percentage=rate.discount_percentage,
        discount_amount=round_half_up(discount_amount),
        final_cost=round_half_up(final_cost),
    )
    cost_rupees = round_to_int(final_cost)
    logger.info(f"Priced {grams:.2f}g for {resolved.value}: {cost_rupees} INR (subtotal {subtotal:.2f}, discount {discount_amount:.2f})")
    return PriceQuote(cost_rupees=cost_rupees, breakdown=breakdown)

def list_rates() -> List[Dict[str, Any]]:
    """Returns the rate table as plain dicts, one per category."""
    return [
        {
            "category": category.value,
            "cost_per_gram": rate.cost_per_gram,
            "discount_percentage": rate.discount_percentage,
        }
        for category, rate in RATE_TABLE.items()
    ]

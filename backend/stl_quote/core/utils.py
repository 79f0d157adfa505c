# core/utils.py

import math
import logging
from decimal import Context, Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)

def round_half_up(value: float, places: int = 2) -> float:
    """
    Rounds a float to `places` decimals, ties going away from zero.

    Python's round() uses banker's rounding, which would turn a displayed
    0.125 into 0.12. Prices and report figures round ties up instead, based on
    the exact binary value of the float.

    Args:
        value: The number to round.
        places: Number of decimal places to keep.

    Returns:
        The rounded value as a float.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-places)
    # Enough digits for every integer digit plus `places`, or quantize overflows
    context = Context(prec=max(28, exact.adjusted() + places + 2))
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP, context=context))

def round_to_int(value: float) -> int:
    """Rounds to the nearest whole number, halves going up (2.5 -> 3)."""
    return int(math.floor(value + 0.5))

def format_time(hours: float) -> str:
    """
    Formats a duration in hours into a human-readable string (e.g., "1h 30m").

    Args:
        hours: The duration in hours.

    Returns:
        A formatted string. "N/A" if the input is invalid, "0m" for zero.
    """
    if hours is None or not isinstance(hours, (int, float)) or hours < 0 or not math.isfinite(hours):
        return "N/A"

    total_minutes = round_to_int(hours * 60)
    h, m = divmod(total_minutes, 60)

    parts = []
    if h > 0:
        parts.append(f"{h}h")
    if m > 0 or not parts:
        parts.append(f"{m}m")
    return " ".join(parts)

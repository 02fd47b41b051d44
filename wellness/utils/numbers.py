import math
from typing import Any, Optional


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round .5 away from zero for positives, like the dashboard's Math.round."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def to_int_or_none(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number != int(number):
        return None
    return int(number)

"""
Coercion helpers used at the decoding boundaries for model output.
"""

import math
from typing import Any, Optional


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def to_number(value: Any) -> Optional[float]:
    """Parse ints, floats and numeric strings. Booleans and junk give None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def clamp_int(value: Any, low: int = 0, high: int = 100, default: int = 0) -> int:
    """Coerce to an int within [low, high]; missing or non-numeric gives default."""
    number = to_number(value)
    if number is None:
        return default
    return max(low, min(high, round_half_up(number)))


def clamp_float(value: Any, low: float, high: float, default: float) -> float:
    number = to_number(value)
    if number is None:
        return default
    return max(low, min(high, number))


def to_str_list(value: Any) -> list[str]:
    """Keep the non-empty string entries of a list; anything else becomes []."""
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


def to_dict_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def to_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None

"""
Lenient numeric parsing for projection inputs.

Entity records arrive from forms and saved calculator states, so numeric
fields may be blank strings, formatted strings ("$1,500", "4.5%") or None.
These helpers turn such values into plain floats with an explicit default
instead of raising or propagating NaN.
"""

import math
import re
from typing import Any, Optional

_NUMERIC_CHARS = re.compile(r"[^0-9.eE+-]+")


def safe_float(value: Any, default: float = 0.0) -> float:
    """
    Parse a value as a finite float, falling back to a default.

    Args:
        value: Raw input (number, numeric string, None, ...)
        default: Value returned when the input cannot be parsed

    Returns:
        The parsed float, or ``default`` for missing, non-numeric,
        NaN, infinite or float-overflowing input
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, (int, float)):
        try:
            parsed = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        cleaned = _NUMERIC_CHARS.sub("", value.strip())
        if not cleaned:
            return default
        try:
            parsed = float(cleaned)
        except ValueError:
            return default
    else:
        try:
            parsed = float(value)
        except (TypeError, ValueError, OverflowError):
            return default

    if math.isnan(parsed) or math.isinf(parsed):
        return default
    return parsed


def optional_float(value: Any) -> Optional[float]:
    """Parse a value as a float, returning None when it is blank or invalid."""
    parsed = safe_float(value, default=math.nan)
    if math.isnan(parsed):
        return None
    return parsed


def safe_int(value: Any, default: int = 0) -> int:
    """Parse a value as an int, truncating fractional input."""
    parsed = optional_float(value)
    if parsed is None:
        return default
    return int(parsed)


def optional_int(value: Any) -> Optional[int]:
    """Parse a value as an int, returning None when it is blank or invalid."""
    parsed = optional_float(value)
    if parsed is None:
        return None
    return int(parsed)


def compound_factor(rate_percent: float, years: float) -> float:
    """
    Growth factor ``(1 + rate/100) ** years`` kept real-valued.

    A base below zero raised to a fractional power has no real value; such
    combinations yield 0 rather than a complex number. A factor too large for
    a float saturates at infinity with the sign the power would have.
    """
    base = 1 + rate_percent / 100
    if base < 0 and not float(years).is_integer():
        return 0.0
    try:
        return float(base**years)
    except OverflowError:
        if base < 0 and int(years) % 2 == 1:
            return -math.inf
        return math.inf

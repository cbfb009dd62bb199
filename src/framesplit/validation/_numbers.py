"""Numeric type checks shared by the validators."""

from __future__ import annotations

import math
from typing import Any


def is_finite_number(value: Any) -> bool:
    """True for int or float values that are not NaN or infinite; bools excluded."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def is_finite_integer(value: Any) -> bool:
    """True for finite numbers with no fractional part, such as 3 or 3.0."""
    if not is_finite_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()

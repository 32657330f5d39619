"""Numeric coercion helpers shared by value encoding and distinct extraction."""

import math
import re
from typing import Any, Optional, Union

Number = Union[int, float]

_DECIMAL_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def coerce_number(value: Any) -> Optional[Number]:
    """Parse ``value`` as a finite number.

    Integral results are returned as ``int`` so ``"2020"`` and ``2020.0``
    both become ``2020``. Strings are trimmed first. Booleans, blanks,
    ``nan``/``inf`` spellings and anything that is not a plain decimal
    literal return None.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number: Number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.match(text):
            return None
        number = float(text) if any(ch in text for ch in ".eE") else int(text)
    else:
        return None

    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def format_number(number: Number) -> str:
    """Render a number as a bare literal."""
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return repr(number) if isinstance(number, float) else str(number)

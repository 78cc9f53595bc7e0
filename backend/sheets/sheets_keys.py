"""
Student ID helpers for key cells.
"""
import math
import re
from typing import Any, Optional, Union

import pandas as pd

# e.g. "Garcia, Ana (123456)" from form responses
EMBEDDED_ID_PATTERN = re.compile(r'\((\d{6})\)')


def is_empty_key(value: Any) -> bool:
    """True for None, NaN/NA and blank strings."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def normalize_key(value: Any) -> Any:
    """Strip surrounding whitespace from string keys; other values pass through."""
    if isinstance(value, str):
        return value.strip()
    return value


def coerce_numeric_key(value: Any) -> Optional[Union[int, float]]:
    """
    Convert a key cell to a number.

    Integral values become ``int`` so 123456 and "123456" and 123456.0 map to
    the same key. Returns None when the value is not a finite number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return coerce_numeric_key(number)
    return None


def extract_student_id(value: Any) -> Optional[int]:
    """
    Pull a student ID out of a cell.

    Accepts plain numbers, numeric strings and "Name (123456)" text.
    Returns None when nothing usable is found.
    """
    if isinstance(value, str):
        match = EMBEDDED_ID_PATTERN.search(value)
        if match:
            return int(match.group(1))
    number = coerce_numeric_key(value)
    if number is None or number <= 0 or not float(number).is_integer():
        return None
    return int(number)

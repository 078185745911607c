"""
Presence Predicates

Pure checks on raw request values, shared by every validator. A value that
fails them is rejected before the catalog touches storage.
"""

import math
from typing import Any


def is_string_provided(candidate: Any) -> bool:
    """True for a non-empty string."""
    return isinstance(candidate, str) and len(candidate) > 0


def is_number_provided(candidate: Any) -> bool:
    """
    True for a finite number or a string that parses as one.

    Booleans are not numbers here even though Python treats them as ints.
    Neither are integers too large to convert to a float.

    Example:
        >>> is_number_provided("42")
        True
        >>> is_number_provided("forty-two")
        False
    """
    if isinstance(candidate, bool) or candidate is None:
        return False
    if isinstance(candidate, (int, float)):
        try:
            return math.isfinite(candidate)
        except OverflowError:
            return False
    if isinstance(candidate, str) and candidate.strip():
        try:
            return math.isfinite(float(candidate))
        except ValueError:
            return False
    return False

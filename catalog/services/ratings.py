"""
Ratings Service

Checks the rating aggregate attached to a book.

The aggregate is denormalized and supplied by the caller: an average plus a
total count and five per-star counts. It is stored verbatim. In particular
count is NOT recomputed from the per-star columns, and they are not required
to add up to it.

A rating aggregate is valid when all seven fields are present and numeric,
the average lies in [1.0, 5.0], and none of the six counts is negative.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from catalog.exceptions import RangeError, ShapeError
from catalog.utils.presence import is_number_provided

AVERAGE_MIN = 1.0
AVERAGE_MAX = 5.0

RATING_FIELDS = (
    "average",
    "count",
    "rating_1",
    "rating_2",
    "rating_3",
    "rating_4",
    "rating_5",
)

# rating fields -> books table columns
_COLUMNS = {
    "average": "rating_avg",
    "count": "rating_count",
    "rating_1": "rating_1_star",
    "rating_2": "rating_2_star",
    "rating_3": "rating_3_star",
    "rating_4": "rating_4_star",
    "rating_5": "rating_5_star",
}


class RatingViolation(str, Enum):
    """The first reason a rating aggregate was rejected."""

    MISSING_FIELD = "missing_field"
    OUT_OF_RANGE_AVERAGE = "out_of_range_average"
    NEGATIVE_COUNT = "negative_count"


_MESSAGES = {
    RatingViolation.MISSING_FIELD: (
        ShapeError,
        "Invalid or missing ratings - please refer to documentation",
    ),
    RatingViolation.OUT_OF_RANGE_AVERAGE: (
        RangeError,
        "Rating average is not in range of 1 to 5 inclusive - please refer to documentation",
    ),
    RatingViolation.NEGATIVE_COUNT: (
        RangeError,
        "Rating count must be positive - please refer to documentation",
    ),
}


def _field(ratings: Any, name: str) -> Any:
    """Read one field from a RatingsIn-like object or a plain mapping."""
    if isinstance(ratings, Mapping):
        if name in ratings:
            return ratings[name]
        # rating_1 is also accepted as rating1
        return ratings.get(name.replace("_", ""))
    return getattr(ratings, name, None)


def validate_ratings(ratings: Any) -> RatingViolation | None:
    """
    Find the first problem with a rating aggregate.

    Args:
        ratings: A RatingsIn, a mapping with the same keys, or None

    Returns:
        The violation, or None if the aggregate is valid

    Example:
        >>> validate_ratings({"average": 0, "count": 1, "rating_1": 1,
        ...                   "rating_2": 0, "rating_3": 0, "rating_4": 0, "rating_5": 0})
        <RatingViolation.OUT_OF_RANGE_AVERAGE: 'out_of_range_average'>
    """
    if ratings is None:
        return RatingViolation.MISSING_FIELD
    if not all(is_number_provided(_field(ratings, name)) for name in RATING_FIELDS):
        return RatingViolation.MISSING_FIELD
    if not AVERAGE_MIN <= float(_field(ratings, "average")) <= AVERAGE_MAX:
        return RatingViolation.OUT_OF_RANGE_AVERAGE
    if any(float(_field(ratings, name)) < 0 for name in RATING_FIELDS[1:]):
        return RatingViolation.NEGATIVE_COUNT
    return None


def check_ratings(ratings: Any) -> dict[str, Any]:
    """
    Validate a rating aggregate and map it onto the books columns.

    Raises:
        ShapeError: A field is missing or not numeric
        RangeError: The average or count is out of bounds

    Returns:
        Column values ready for an INSERT or UPDATE of the books table
    """
    violation = validate_ratings(ratings)
    if violation is not None:
        error, message = _MESSAGES[violation]
        raise error(message)

    columns: dict[str, Any] = {}
    for name in RATING_FIELDS:
        value = float(_field(ratings, name))
        columns[_COLUMNS[name]] = value if name == "average" else int(value)
    return columns

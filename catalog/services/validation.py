"""
Validation Helpers

Request checks built on the presence predicates. Every check
here runs before the catalog touches storage and fails with a ShapeError or
RangeError carrying the single message the client receives. Checks run in a
fixed order and the first failure wins.
"""

import logging
from dataclasses import dataclass
from typing import Any, NoReturn

from catalog.exceptions import RangeError, ShapeError
from catalog.services.authors import split_authors
from catalog.services.queries import ISBN_LIMIT, RatingOrder
from catalog.services.ratings import check_ratings
from catalog.utils.presence import is_number_provided, is_string_provided

logger = logging.getLogger(__name__)


def _invalid(name: str) -> str:
    return f"Invalid or missing {name} - please refer to documentation"


def _reject(error: type[ShapeError] | type[RangeError], message: str) -> NoReturn:
    logger.info(f"Rejected request: {message}")
    raise error(message)


# =============================================================================
# Path parameters
# =============================================================================
def check_isbn(raw: Any) -> int:
    """
    Parse an ISBN taken from the URL.

    Raises:
        ShapeError: If the value is not a whole number
        RangeError: If it falls outside 0 <= isbn < 10**13
    """
    if not is_number_provided(raw):
        _reject(ShapeError, "Query parameter not of required type - please refer to documentation")
    value = float(raw)
    if not value.is_integer():
        _reject(ShapeError, "Query parameter not of required type - please refer to documentation")
    isbn = int(raw) if isinstance(raw, int) else int(value)
    if not 0 <= isbn < ISBN_LIMIT:
        _reject(RangeError, "ISBN not in range - please refer to documentation")
    return isbn


# =============================================================================
# Book entries
# =============================================================================
@dataclass
class ValidatedEntry:
    """A book entry that passed every check, ready for insertion."""

    columns: dict[str, Any]
    authors: str

    @property
    def isbn13(self) -> int:
        return self.columns["isbn13"]


def check_book_entry(entry: Any) -> ValidatedEntry:
    """
    Check a submitted book entry field by field.

    Order: ISBN, authors, publication, original title, title, ratings,
    large icon, small icon. original_title falls back to title when absent.

    Args:
        entry: A BookEntry (or anything exposing the same attributes), or None

    Returns:
        The column values for the books table plus the raw authors string
    """
    isbn = getattr(entry, "isbn13", None)
    if not is_number_provided(isbn) or not float(isbn).is_integer():
        _reject(ShapeError, _invalid("ISBN"))
    if not 0 <= int(isbn) < ISBN_LIMIT:
        _reject(RangeError, _invalid("ISBN"))

    authors = getattr(entry, "authors", None)
    if not is_string_provided(authors) or not split_authors(authors):
        _reject(ShapeError, _invalid("Authors"))

    publication = getattr(entry, "publication", None)
    if not is_number_provided(publication):
        _reject(ShapeError, _invalid("Publication"))
    if float(publication) < 0:
        _reject(RangeError, _invalid("Publication"))

    original_title = getattr(entry, "original_title", None)
    if original_title is not None and not is_string_provided(original_title):
        _reject(ShapeError, _invalid("Original Title"))

    title = getattr(entry, "title", None)
    if not is_string_provided(title):
        _reject(ShapeError, _invalid("Title"))

    rating_columns = check_ratings(getattr(entry, "ratings", None))

    icons = getattr(entry, "icons", None)
    if not is_string_provided(getattr(icons, "large", None)):
        _reject(ShapeError, _invalid("Image Url"))
    if not is_string_provided(getattr(icons, "small", None)):
        _reject(ShapeError, _invalid("Image Small Url"))

    columns = {
        "isbn13": int(isbn),
        "publication_year": int(publication),
        "original_title": original_title if original_title is not None else title,
        "title": title,
        **rating_columns,
        "image_url": icons.large,
        "image_small_url": icons.small,
    }
    return ValidatedEntry(columns=columns, authors=authors)


# =============================================================================
# Rating range searches
# =============================================================================
def check_rating_range(
    minimum: Any,
    maximum: Any,
    order: Any,
) -> tuple[float, float, RatingOrder]:
    """
    Check a rating-range search before it is turned into a query.

    Requires numeric bounds with 0 < minimum <= maximum and an order of
    "min-first" or "max-first".
    """
    if not is_number_provided(minimum):
        _reject(ShapeError, "Missing or invalid lower-bound parameter - please refer to documentation")
    if not is_number_provided(maximum):
        _reject(ShapeError, "Missing or invalid upper-bound parameter - please refer to documentation")
    if not is_string_provided(order):
        _reject(ShapeError, "Missing ordering field in http body - please refer to documentation")

    low, high = float(minimum), float(maximum)
    if low <= 0:
        _reject(RangeError, "Missing or invalid lower-bound parameter - please refer to documentation")
    if high < low:
        _reject(
            RangeError,
            "The lower bound for the interval is greater than the upper bound"
            " - please refer to documentation",
        )
    try:
        direction = RatingOrder(order)
    except ValueError:
        _reject(ShapeError, "Ordering field must be one of set options - please refer to documentation")
    return low, high, direction

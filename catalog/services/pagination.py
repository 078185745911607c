"""
Offset Pagination

Resolves the raw ``limit``/``offset`` pair of a pagination request.

Unlike the other catalog inputs these are never rejected: anything absent,
non-numeric, out of range or too large for the database silently falls
back to a default.

    limit  -> the value if it is > 0, otherwise DEFAULT_LIMIT
    offset -> the value if it is >= 0, otherwise 0
"""

from dataclasses import dataclass
from typing import Any

from catalog.utils.presence import is_number_provided

DEFAULT_LIMIT = 16

# LIMIT and OFFSET are bound as signed 64-bit integers.
BOUND_LIMIT = 2**63


def _as_int(raw: Any) -> int | None:
    if not is_number_provided(raw):
        return None
    value = raw if isinstance(raw, int) else int(float(raw))
    return value if value < BOUND_LIMIT else None


@dataclass(frozen=True)
class OffsetPagination:
    """
    A resolved page request.

    Example:
        >>> page = OffsetPagination.resolve("0", -5)
        >>> page.limit, page.offset, page.next_page
        (16, 0, 16)
    """

    limit: int
    offset: int

    @classmethod
    def resolve(
        cls,
        raw_limit: Any,
        raw_offset: Any,
        default_limit: int = DEFAULT_LIMIT,
    ) -> "OffsetPagination":
        limit = _as_int(raw_limit)
        offset = _as_int(raw_offset)
        return cls(
            limit=limit if limit is not None and limit > 0 else default_limit,
            offset=offset if offset is not None and offset >= 0 else 0,
        )

    @property
    def next_page(self) -> int:
        """
        Offset of the following page.

        Reported even past the end of the catalog; clients detect the last
        page from an empty result list.
        """
        return self.limit + self.offset

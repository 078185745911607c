"""
Pydantic Schemas Package

Request/response shapes for the HTTP boundary, kept apart from the
SQLAlchemy models so the wire format can differ from the table layout
(for example ``publication`` vs ``publication_year``).

Schema Naming Convention:
- XxxRequest: Request bodies
- XxxIn: Nested request objects
- XxxResponse / XxxResult(s): Response bodies
"""

from catalog.schemas.account import (
    AccountInfo,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from catalog.schemas.book import (
    BookCreatedResponse,
    BookCreateRequest,
    BookEntry,
    BookResponse,
    BookResult,
    BookResults,
    Icons,
    IconsIn,
    MessageResponse,
    OffsetPaginationRequest,
    PaginatedBooks,
    PaginationInfo,
    RatingRangeRequest,
    Ratings,
    RatingsIn,
    RatingUpdateRequest,
)

__all__ = [
    # Account schemas
    "AccountInfo",
    "ChangePasswordRequest",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    # Book request schemas
    "BookCreateRequest",
    "BookEntry",
    "IconsIn",
    "OffsetPaginationRequest",
    "RatingRangeRequest",
    "RatingsIn",
    "RatingUpdateRequest",
    # Book response schemas
    "BookCreatedResponse",
    "BookResponse",
    "BookResult",
    "BookResults",
    "Icons",
    "MessageResponse",
    "PaginatedBooks",
    "PaginationInfo",
    "Ratings",
]

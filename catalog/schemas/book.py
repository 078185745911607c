"""
Book Pydantic Schemas

Request schemas parse the JSON shape only: every field is optional so that
presence and range checks happen in the validation services, which answer
with the catalog's single-message errors instead of Pydantic's error lists.

Response schemas describe the denormalized Book view:

    {
        "isbn13": 9780439023480,
        "authors": "Suzanne Collins",
        "publication": 2008,
        "original_title": "The Hunger Games",
        "title": "The Hunger Games (The Hunger Games, #1)",
        "ratings": {"average": 4.34, "count": 4780653, "rating_1": 66715, ...},
        "icons": {"large": "https://...", "small": "https://..."}
    }
"""

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from catalog.models import Book
from catalog.services.authors import AUTHOR_SEPARATOR, canonical_authors


# =============================================================================
# Request Schemas
# =============================================================================
class RatingsIn(BaseModel):
    """
    Rating aggregate as sent by clients.

    Per-star counts are accepted as either ``rating_1`` or ``rating1``.
    """

    average: float | None = None
    count: int | None = None
    rating_1: int | None = Field(
        default=None, validation_alias=AliasChoices("rating_1", "rating1")
    )
    rating_2: int | None = Field(
        default=None, validation_alias=AliasChoices("rating_2", "rating2")
    )
    rating_3: int | None = Field(
        default=None, validation_alias=AliasChoices("rating_3", "rating3")
    )
    rating_4: int | None = Field(
        default=None, validation_alias=AliasChoices("rating_4", "rating4")
    )
    rating_5: int | None = Field(
        default=None, validation_alias=AliasChoices("rating_5", "rating5")
    )


class IconsIn(BaseModel):
    large: str | None = None
    small: str | None = None


class BookEntry(BaseModel):
    """A book as submitted for creation."""

    isbn13: int | None = Field(default=None, examples=[9780439023480])
    authors: str | None = Field(
        default=None,
        description="Author names separated by ', '",
        examples=["Stephen King, Peter Straub"],
    )
    publication: int | None = Field(default=None, examples=[2008])
    original_title: str | None = Field(
        default=None,
        description="Series or canonical title, defaults to title",
    )
    title: str | None = None
    ratings: RatingsIn | None = None
    icons: IconsIn | None = None


class BookCreateRequest(BaseModel):
    entry: BookEntry | None = None


class RatingUpdateRequest(BaseModel):
    ratings: RatingsIn | None = None


class RatingRangeRequest(BaseModel):
    """Body of a rating-range search: ``{"min": 3.5, "max": 5, "order": "max-first"}``."""

    minimum: float | None = Field(default=None, alias="min")
    maximum: float | None = Field(default=None, alias="max")
    order: str | None = Field(default=None, examples=["min-first", "max-first"])

    model_config = ConfigDict(populate_by_name=True)


class OffsetPaginationRequest(BaseModel):
    """
    Raw pagination input.

    Values are left untyped: absent, negative or non-numeric values fall back
    to defaults instead of being rejected.
    """

    limit: Any = None
    offset: Any = None


# =============================================================================
# Response Schemas
# =============================================================================
class Ratings(BaseModel):
    average: float
    count: int
    rating_1: int
    rating_2: int
    rating_3: int
    rating_4: int
    rating_5: int


class Icons(BaseModel):
    large: str
    small: str


class BookResponse(BaseModel):
    """
    The denormalized Book view returned by every catalog endpoint.

    ``authors`` is a single string of author names sorted alphabetically and
    joined with ", ".
    """

    isbn13: int
    authors: str
    publication: int
    original_title: str
    title: str
    ratings: Ratings
    icons: Icons

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BookResponse":
        """
        Project one row of the aggregate view.

        The aggregated authors string is re-sorted here because not every
        engine orders the values it aggregates. Stored author names never
        contain the separator, so splitting on it is lossless.
        """
        names = row["authors"].split(AUTHOR_SEPARATOR) if row["authors"] else []
        return cls._project(row, canonical_authors(names))

    @classmethod
    def from_model(cls, book: Book) -> "BookResponse":
        """Project a Book loaded with its authors relationship."""
        authors = canonical_authors(author.author_name for author in book.authors)
        values = {column.name: getattr(book, column.key) for column in Book.__table__.columns}
        return cls._project(values, authors)

    @classmethod
    def _project(cls, values: Mapping[str, Any], authors: str) -> "BookResponse":
        return cls(
            isbn13=int(values["isbn13"]),
            authors=authors,
            publication=values["publication_year"],
            original_title=values["original_title"],
            title=values["title"],
            ratings=Ratings(
                average=values["rating_avg"],
                count=values["rating_count"],
                rating_1=values["rating_1_star"],
                rating_2=values["rating_2_star"],
                rating_3=values["rating_3_star"],
                rating_4=values["rating_4_star"],
                rating_5=values["rating_5_star"],
            ),
            icons=Icons(
                large=values["image_url"],
                small=values["image_small_url"],
            ),
        )


class BookResult(BaseModel):
    result: BookResponse


class BookResults(BaseModel):
    results: list[BookResponse]


class BookCreatedResponse(BaseModel):
    """
    Outcome of a book insert.

    The book row always exists when this is returned. Author links are
    created best-effort, so the names whose upsert or link failed are listed
    separately and are missing from ``result.authors``.
    """

    message: str
    result: BookResponse
    linked_authors: list[str] = Field(default_factory=list)
    failed_authors: list[str] = Field(default_factory=list)


class PaginationInfo(BaseModel):
    total_records: int = Field(..., alias="totalRecords", ge=0)
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)
    next_page: int = Field(..., alias="nextPage")

    model_config = ConfigDict(populate_by_name=True)


class PaginatedBooks(BaseModel):
    """
    One page of the catalog.

    ``totalRecords`` comes from a separate count query, so it is a snapshot
    that may already be stale relative to the page.
    """

    results: list[BookResponse]
    pagination: PaginationInfo

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "results": [],
                "pagination": {
                    "totalRecords": 10000,
                    "limit": 16,
                    "offset": 32,
                    "nextPage": 48,
                },
            }
        },
    )


class MessageResponse(BaseModel):
    message: str

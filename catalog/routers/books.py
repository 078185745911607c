"""
Books Router

Catalog endpoints: insert, lookups, searches, rating updates, deletes
and offset pagination.

Every route requires a Bearer token (router-level dependency) and hands
its raw input to services/catalog.py, which validates it and raises a
CatalogError on failure. main.py turns those into ``{"message": ...}``
responses, so the handlers here only shape successful results.

Routes:
- POST   /books/                    Insert a book and link its authors
- GET    /books/isbns/{isbn}        One book by ISBN
- DELETE /books/isbns/{isbn}        Delete one book by ISBN
- POST   /books/rating              Books within a rating range
- PUT    /books/rating/{isbn}       Replace a book's rating aggregate
- GET    /books/title/{name}        Books with exactly this title
- DELETE /books/title/{name}        Delete books with exactly this title
- GET    /books/author/{name}       Books by exactly this author
- DELETE /books/author/{name}       Delete books by exactly this author
- POST   /books/pagination/offset   One page of the catalog
"""

from fastapi import APIRouter, Depends, Request, status

from catalog.config import get_settings
from catalog.dependencies import DbSession, get_current_account
from catalog.schemas import (
    BookCreatedResponse,
    BookCreateRequest,
    BookResult,
    BookResults,
    MessageResponse,
    OffsetPaginationRequest,
    PaginatedBooks,
    PaginationInfo,
    RatingRangeRequest,
    RatingUpdateRequest,
)
from catalog.services import catalog
from catalog.services.pagination import OffsetPagination
from catalog.services.rate_limiter import limiter
from catalog.services.validation import check_isbn

settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================
# dependencies=[...] applies the token check to every route below, before
# the request body is even looked at.
router = APIRouter(
    prefix="/books",
    tags=["Books"],
    dependencies=[Depends(get_current_account)],
    responses={
        400: {"model": MessageResponse, "description": "Invalid or missing input"},
        401: {"model": MessageResponse, "description": "Missing or invalid token"},
        404: {"model": MessageResponse, "description": "Book not found"},
    },
)


# -------------------------------------------------------------------------
# Insert
# -------------------------------------------------------------------------
@router.post(
    "/",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Insert a book",
    description="""
    Insert a book and link it to its authors.

    Authors are given as one string separated by ", " and are created on
    first use. Linking is best-effort: names that could not be stored are
    listed in ``failed_authors`` and the book is still created.
    """,
)
@limiter.limit(settings.rate_limit_write)
def create_book(
    request: Request,
    body: BookCreateRequest,
    db: DbSession,
) -> BookCreatedResponse:
    creation = catalog.create_book(db, body.entry)
    return BookCreatedResponse(
        message="Book inserted",
        result=creation.book,
        linked_authors=creation.linked_authors,
        failed_authors=creation.failed_authors,
    )


# -------------------------------------------------------------------------
# By ISBN
# -------------------------------------------------------------------------
@router.get(
    "/isbns/{isbn}",
    response_model=BookResult,
    summary="Get a book by ISBN",
)
@limiter.limit(settings.rate_limit_default)
def get_book(request: Request, isbn: str, db: DbSession) -> BookResult:
    """
    Get a single book by its 13-digit ISBN.

    The ISBN is taken as a string and checked by check_isbn so that a
    malformed value gets the catalog's own 400 message.
    """
    return BookResult(result=catalog.get_by_isbn(db, check_isbn(isbn)))


@router.delete(
    "/isbns/{isbn}",
    response_model=BookResult,
    summary="Delete a book by ISBN",
    description="Delete one book and return it as it was before deletion.",
)
@limiter.limit(settings.rate_limit_write)
def delete_book(request: Request, isbn: str, db: DbSession) -> BookResult:
    return BookResult(result=catalog.delete_by_isbn(db, check_isbn(isbn)))


# -------------------------------------------------------------------------
# Ratings
# -------------------------------------------------------------------------
@router.post(
    "/rating",
    response_model=BookResults,
    summary="Search books by rating range",
    description="""
    Books whose average rating lies between ``min`` and ``max`` inclusive,
    sorted by average: ``"min-first"`` (ascending) or ``"max-first"``
    (descending). An empty list is a valid result.
    """,
)
@limiter.limit(settings.rate_limit_default)
def search_by_rating(
    request: Request,
    body: RatingRangeRequest,
    db: DbSession,
) -> BookResults:
    books = catalog.find_by_rating_range(db, body.minimum, body.maximum, body.order)
    return BookResults(results=books)


@router.put(
    "/rating/{isbn}",
    response_model=BookResult,
    status_code=status.HTTP_201_CREATED,
    summary="Replace a book's ratings",
    description="Replace all seven rating fields of a book. Values are stored as given.",
)
@limiter.limit(settings.rate_limit_write)
def update_ratings(
    request: Request,
    isbn: str,
    body: RatingUpdateRequest,
    db: DbSession,
) -> BookResult:
    return BookResult(result=catalog.update_ratings(db, check_isbn(isbn), body.ratings))


# -------------------------------------------------------------------------
# By title
# -------------------------------------------------------------------------
@router.get(
    "/title/{name}",
    response_model=BookResults,
    summary="Get books by title",
    description="Books whose title matches exactly (case-sensitive).",
)
@limiter.limit(settings.rate_limit_default)
def get_books_by_title(request: Request, name: str, db: DbSession) -> BookResults:
    return BookResults(results=catalog.find_by_title(db, name))


@router.delete(
    "/title/{name}",
    response_model=BookResults,
    summary="Delete books by title",
)
@limiter.limit(settings.rate_limit_write)
def delete_books_by_title(request: Request, name: str, db: DbSession) -> BookResults:
    return BookResults(results=catalog.delete_by_title(db, name))


# -------------------------------------------------------------------------
# By author
# -------------------------------------------------------------------------
@router.get(
    "/author/{name}",
    response_model=BookResults,
    summary="Get books by author",
    description="Books linked to an author with exactly this name. Each result lists all its authors.",
)
@limiter.limit(settings.rate_limit_default)
def get_books_by_author(request: Request, name: str, db: DbSession) -> BookResults:
    return BookResults(results=catalog.find_by_author(db, name))


@router.delete(
    "/author/{name}",
    response_model=BookResults,
    summary="Delete books by author",
    description="Delete every book linked to the author. The author row itself is kept.",
)
@limiter.limit(settings.rate_limit_write)
def delete_books_by_author(request: Request, name: str, db: DbSession) -> BookResults:
    return BookResults(results=catalog.delete_by_author(db, name))


# -------------------------------------------------------------------------
# Pagination
# -------------------------------------------------------------------------
@router.post(
    "/pagination/offset",
    response_model=PaginatedBooks,
    summary="List books with offset pagination",
    description="""
    One page of the catalog in ISBN order.

    ``limit`` defaults to 16 and ``offset`` to 0; invalid values fall back
    to those defaults instead of being rejected. ``nextPage`` is always
    ``limit + offset``, even past the end of the catalog.
    """,
)
@limiter.limit(settings.rate_limit_default)
def list_books(
    request: Request,
    db: DbSession,
    body: OffsetPaginationRequest | None = None,
) -> PaginatedBooks:
    if body is None:
        body = OffsetPaginationRequest()
    page = OffsetPagination.resolve(
        body.limit,
        body.offset,
        default_limit=settings.default_page_limit,
    )
    books, total = catalog.list_page(db, page)
    return PaginatedBooks(
        results=books,
        pagination=PaginationInfo(
            total_records=total,
            limit=page.limit,
            offset=page.offset,
            next_page=page.next_page,
        ),
    )

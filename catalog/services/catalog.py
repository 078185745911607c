"""
Catalog Service

Coordinates every read and write of the book catalog.

Insert Flow
===========
Creating a book takes several independent commits rather than one
transaction:

1. Validate the whole entry. Nothing is written if any field is bad.
2. Insert the book row and commit. The primary key on isbn13 is the only
   source of truth for "book exists".
3. Upsert each author (see services/authors.py), one commit per name.
4. Link each resolved author to the book, one commit per link.

A failure in step 3 or 4 is logged and reported in ``failed_authors``;
the book row from step 2 stays. Callers get a 201 with the split of
linked and failed authors instead of an all-or-nothing result.

Deletes
=======
Deletes load the matching books (with authors) first so the response can
return what was removed, then drop the links and the books in a single
commit. The link table also cascades on delete; removing links explicitly
works with or without that cascade.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import exc as sa_exc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from catalog.exceptions import ConflictError, IntegrityError, NotFoundError, StorageError
from catalog.models import Book
from catalog.schemas.book import BookResponse
from catalog.services import authors, queries
from catalog.services.pagination import OffsetPagination
from catalog.services.ratings import check_ratings
from catalog.services.validation import check_book_entry, check_rating_range

logger = logging.getLogger(__name__)


@dataclass
class BookCreation:
    """Result of create_book: the stored book plus how its authors fared."""

    book: BookResponse
    linked_authors: list[str] = field(default_factory=list)
    failed_authors: list[str] = field(default_factory=list)


def _is_unique_violation(exc: SQLAlchemyError) -> bool:
    """
    Recognise a duplicate-key error from either supported engine.

    PostgreSQL reports 'Key (isbn13)=(...) already exists.' in the error
    detail; SQLite raises 'UNIQUE constraint failed: ...'.
    """
    if not isinstance(exc, sa_exc.IntegrityError):
        return False
    diag = getattr(exc.orig, "diag", None)
    detail = getattr(diag, "message_detail", None) or ""
    return detail.endswith("already exists.") or "UNIQUE constraint failed" in str(exc.orig)


def _storage_failure(db: Session, action: str) -> StorageError:
    db.rollback()
    logger.error(f"Storage failure while {action}", exc_info=True)
    return StorageError(f"Storage failure while {action}")


def _fetch(db: Session, stmt: Any, action: str) -> list[BookResponse]:
    """Run a Book view query and project its rows."""
    try:
        rows = db.execute(stmt).mappings().all()
    except SQLAlchemyError as e:
        raise _storage_failure(db, action) from e
    return [BookResponse.from_row(row) for row in rows]


def _load_book(db: Session, isbn: int) -> BookResponse:
    """Reload one book with its authors, bypassing stale identity-map state."""
    stmt = queries.books_with_authors(Book.isbn13 == isbn).execution_options(
        populate_existing=True
    )
    try:
        book = db.execute(stmt).scalar_one()
    except SQLAlchemyError as e:
        raise _storage_failure(db, f"reloading book {isbn}") from e
    return BookResponse.from_model(book)


# =============================================================================
# Mutations
# =============================================================================
def create_book(db: Session, entry: Any) -> BookCreation:
    """
    Validate and insert a book, then attach its authors best-effort.

    Raises:
        ShapeError / RangeError: The entry is invalid (nothing was written)
        ConflictError: A book with this ISBN already exists
        StorageError: The book row could not be inserted
    """
    validated = check_book_entry(entry)
    isbn = validated.isbn13

    try:
        db.execute(queries.insert_book(validated.columns))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        if _is_unique_violation(e):
            logger.info(f"Rejected duplicate book {isbn}")
            raise ConflictError("Book exists") from e
        logger.error(f"Book insert failed for {isbn}", exc_info=True)
        raise StorageError(f"Book insert failed for {isbn}") from e

    resolution = authors.normalize(db, validated.authors)
    linked: list[str] = []
    failed = list(resolution.failed)

    dialect_name = db.get_bind().dialect.name
    for ref in resolution.refs:
        try:
            db.execute(queries.link_author(isbn, ref.author_id, dialect_name))
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Linking author '{ref.name}' to book {isbn} failed", exc_info=True)
            failed.append(ref.name)
            continue
        linked.append(ref.name)

    logger.info(f"Created book {isbn} with {len(linked)} linked and {len(failed)} failed authors")
    return BookCreation(book=_load_book(db, isbn), linked_authors=linked, failed_authors=failed)


def update_ratings(db: Session, isbn: int, ratings: Any) -> BookResponse:
    """
    Replace all seven rating columns of a book.

    Raises:
        ShapeError / RangeError: The aggregate is invalid (nothing was written)
        NotFoundError: No book has this ISBN
    """
    values = check_ratings(ratings)
    try:
        result = db.execute(queries.update_ratings(isbn, values))
        if result.rowcount == 0:
            db.rollback()
            raise NotFoundError("No book with given ISBN")
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, f"updating ratings of {isbn}") from e
    return _load_book(db, isbn)


def _delete_matching(
    db: Session,
    criterion: ColumnElement[bool],
    not_found_message: str,
) -> list[BookResponse]:
    """Delete the books matching criterion and return what they looked like."""
    try:
        books = db.execute(queries.books_with_authors(criterion)).scalars().all()
        if not books:
            db.rollback()
            raise NotFoundError(not_found_message)
        removed = [BookResponse.from_model(book) for book in books]
        isbns = [book.isbn13 for book in books]
        db.execute(queries.delete_links(isbns))
        db.execute(queries.delete_books(isbns))
        db.commit()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "deleting books") from e
    # Deleted rows must not linger in the identity map.
    db.expunge_all()
    logger.info(f"Deleted {len(removed)} book(s)")
    return removed


def delete_by_isbn(db: Session, isbn: int) -> BookResponse:
    return _delete_matching(db, Book.isbn13 == isbn, "No book with given ISBN")[0]


def delete_by_title(db: Session, title: str) -> list[BookResponse]:
    return _delete_matching(db, Book.title == title, "title not found")


def delete_by_author(db: Session, name: str) -> list[BookResponse]:
    return _delete_matching(db, Book.isbn13.in_(queries.authored_by(name)), "Authors not found")


# =============================================================================
# Reads
# =============================================================================
def get_by_isbn(db: Session, isbn: int) -> BookResponse:
    """
    Look up one book.

    Raises:
        NotFoundError: No book has this ISBN
        IntegrityError: More than one row came back for a primary key
    """
    books = _fetch(db, queries.by_isbn(isbn), f"reading book {isbn}")
    if not books:
        raise NotFoundError("No book with given ISBN")
    if len(books) > 1:
        logger.error(f"ISBN {isbn} matched {len(books)} rows")
        raise IntegrityError(f"ISBN {isbn} matched {len(books)} rows")
    return books[0]


def find_by_title(db: Session, title: str) -> list[BookResponse]:
    books = _fetch(db, queries.by_title(title), "searching by title")
    if not books:
        raise NotFoundError("No book with given title")
    return books


def find_by_author(db: Session, name: str) -> list[BookResponse]:
    books = _fetch(db, queries.by_author(name), "searching by author")
    if not books:
        raise NotFoundError("Author not found")
    return books


def find_by_rating_range(
    db: Session,
    minimum: Any,
    maximum: Any,
    order: Any,
) -> list[BookResponse]:
    """
    Books whose average rating lies in [minimum, maximum].

    An empty result is a success, unlike the title and author searches.
    """
    low, high, direction = check_rating_range(minimum, maximum, order)
    return _fetch(db, queries.by_rating_range(low, high, direction), "searching by rating")


def list_page(db: Session, pagination: OffsetPagination) -> tuple[list[BookResponse], int]:
    """
    One page of the catalog plus the total number of books.

    The count is a second round trip, so it can disagree with the page if
    books are inserted or deleted in between.
    """
    books = _fetch(db, queries.page(pagination.limit, pagination.offset), "listing books")
    try:
        total = db.execute(queries.count_books()).scalar_one()
    except SQLAlchemyError as e:
        raise _storage_failure(db, "counting books") from e
    return books, total

"""
Query Builder

Every statement the catalog runs is built here, so the routers and the
coordinator never assemble SQL themselves. Values always travel as bound
parameters; nothing a client sends is interpolated into SQL text.

The Book View
=============
Reads return the denormalized Book view: every books column plus one
``authors`` string aggregated over the linked author rows:

    SELECT books.*, string_agg(authors.author_name, ', ') AS authors
    FROM books
    JOIN books_authors ON books_authors.isbn13 = books.isbn13
    JOIN authors ON authors.author_id = books_authors.author_id
    GROUP BY books.*

func.aggregate_strings renders as string_agg on PostgreSQL and as
group_concat on SQLite. Books without any linked author drop out of the
view because of the inner joins.
"""

from enum import Enum
from typing import Any

from sqlalchemy import Delete, Insert, Select, Update, delete, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from catalog.models import Author, Book, books_authors

# Author names are stored one per row and joined back with this separator.
AUTHOR_SEPARATOR = ", "

# ISBN-13 values are non-negative and strictly below 10**13.
ISBN_LIMIT = 10**13

BOOK_COLUMNS = tuple(Book.__table__.columns)


class RatingOrder(str, Enum):
    """Sort direction of a rating-range search."""

    MIN_FIRST = "min-first"
    MAX_FIRST = "max-first"


# =============================================================================
# Reads
# =============================================================================
def book_view() -> Select:
    """Base SELECT of the Book view, without filtering or ordering."""
    return (
        select(
            *BOOK_COLUMNS,
            func.aggregate_strings(Author.author_name, AUTHOR_SEPARATOR).label("authors"),
        )
        .select_from(Book)
        .join(books_authors, books_authors.c.isbn13 == Book.isbn13)
        .join(Author, Author.author_id == books_authors.c.author_id)
        .group_by(*BOOK_COLUMNS)
    )


def by_isbn(isbn: int) -> Select:
    return book_view().where(Book.isbn13 == isbn)


def by_title(title: str) -> Select:
    """Books whose title matches exactly."""
    return book_view().where(Book.title == title).order_by(Book.isbn13)


def authored_by(name: str) -> Select:
    """ISBNs of the books linked to the named author."""
    return (
        select(books_authors.c.isbn13)
        .join(Author, Author.author_id == books_authors.c.author_id)
        .where(Author.author_name == name)
    )


def by_author(name: str) -> Select:
    """
    Books linked to the named author.

    The match happens in a subquery over the link table so the outer view
    still aggregates every co-author, not just the one searched for.
    """
    return book_view().where(Book.isbn13.in_(authored_by(name))).order_by(Book.isbn13)


def by_rating_range(minimum: float, maximum: float, order: RatingOrder) -> Select:
    """Books with minimum <= rating_avg <= maximum, sorted by average."""
    direction = Book.rating_avg.asc() if order is RatingOrder.MIN_FIRST else Book.rating_avg.desc()
    return (
        book_view()
        .where(Book.rating_avg.between(minimum, maximum))
        .order_by(direction, Book.isbn13)
    )


def page(limit: int, offset: int) -> Select:
    """One page of the Book view in ascending ISBN order."""
    return book_view().order_by(Book.isbn13).limit(limit).offset(offset)


def count_books() -> Select:
    """Number of rows in the books table."""
    return select(func.count()).select_from(Book)


# =============================================================================
# Writes
# =============================================================================
def insert_book(values: dict[str, Any]) -> Insert:
    return insert(Book).values(**values)


def update_ratings(isbn: int, values: dict[str, Any]) -> Update:
    return update(Book).where(Book.isbn13 == isbn).values(**values)


def books_with_authors(criterion: ColumnElement[bool]) -> Select:
    """Book entities matching criterion, with their authors eagerly loaded."""
    return (
        select(Book)
        .options(selectinload(Book.authors))
        .where(criterion)
        .order_by(Book.isbn13)
    )


def delete_links(isbns: list[int]) -> Delete:
    return delete(books_authors).where(books_authors.c.isbn13.in_(isbns))


def delete_books(isbns: list[int]) -> Delete:
    return delete(Book).where(Book.isbn13.in_(isbns))


# =============================================================================
# Upserts
# =============================================================================
# ON CONFLICT is dialect specific, so the insert construct is picked from the
# engine the session is bound to.
_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def _insert_for(dialect_name: str):
    try:
        return _DIALECT_INSERTS[dialect_name]
    except KeyError:
        raise ValueError(f"Upserts are not supported on {dialect_name}") from None


def upsert_author(name: str, dialect_name: str) -> Insert:
    """
    Insert an author or touch the existing row, returning its id.

    The no-op DO UPDATE (rather than DO NOTHING) is what makes RETURNING
    produce the id when the name already exists.
    """
    stmt = _insert_for(dialect_name)(Author).values(author_name=name)
    return stmt.on_conflict_do_update(
        index_elements=[Author.author_name],
        set_={"author_name": stmt.excluded.author_name},
    ).returning(Author.author_id)


def link_author(isbn: int, author_id: int, dialect_name: str) -> Insert:
    """Link a book to an author; an existing link is left alone."""
    stmt = _insert_for(dialect_name)(books_authors).values(isbn13=isbn, author_id=author_id)
    return stmt.on_conflict_do_nothing()

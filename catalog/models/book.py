"""
Book Model

The central model of the catalog, plus the association table that links
books to their authors.

WHY an Association Table?
=========================
A book can have several authors and an author can write several books.
The books_authors table holds one row per (isbn13, author_id) pair and
nothing else, so it is defined as a plain Table rather than a class.

Rating columns are a denormalized aggregate supplied by the caller: the
catalog stores them verbatim and never recomputes count from the per-star
columns.
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.author import Author


# =============================================================================
# Association Table
# =============================================================================
# ondelete="CASCADE" lets the engine clean up links when a book goes away.
# The catalog also deletes links itself, so both behaviours are tolerated.
books_authors = Table(
    "books_authors",
    Base.metadata,
    Column(
        "isbn13",
        BigInteger,
        ForeignKey("books.isbn13", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "author_id",
        Integer,
        ForeignKey("authors.author_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Association table linking books to their authors",
)


class Book(Base):
    """
    Book model keyed by its 13-digit ISBN.

    Table: books

    Fields:
    - isbn13: Client-supplied primary key, 0 <= isbn13 < 10**13
    - title / original_title: original_title is the series or canonical
      edition title and defaults to title
    - publication_year: Year of first publication
    - rating_*: Rating aggregate (average plus total and per-star counts)
    - image_url / image_small_url: The large and small cover icons

    Relationships:
    - authors: Many-to-Many through books_authors
    """

    __tablename__ = "books"

    # -------------------------------------------------------------------------
    # Primary Key
    # -------------------------------------------------------------------------
    # BigInteger because 13 digits overflow a 32-bit integer.
    # Values below 10**12 are conceptually zero-padded but stored as-is.
    isbn13: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
        comment="13-digit International Standard Book Number"
    )

    # -------------------------------------------------------------------------
    # Basic Fields
    # -------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(
        String(500),
        index=True,
        nullable=False,
        comment="Book title"
    )

    original_title: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
        comment="Series or canonical edition title"
    )

    publication_year: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of first publication"
    )

    # -------------------------------------------------------------------------
    # Rating Aggregate
    # -------------------------------------------------------------------------
    rating_avg: Mapped[float] = mapped_column(
        Float,
        index=True,
        nullable=False,
        comment="Average rating, 1.0-5.0"
    )
    rating_count: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_1_star: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_2_star: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_3_star: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_4_star: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_5_star: Mapped[int] = mapped_column(Integer, nullable=False)

    # -------------------------------------------------------------------------
    # Icons
    # -------------------------------------------------------------------------
    image_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Large cover image URL"
    )
    image_small_url: Mapped[str] = mapped_column(
        String(1000),
        nullable=False,
        comment="Small cover image URL"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    authors: Mapped[list["Author"]] = relationship(
        "Author",
        secondary=books_authors,
        back_populates="books",
    )

    def __repr__(self) -> str:
        return f"Book(isbn13={self.isbn13}, title='{self.title}')"

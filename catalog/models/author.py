"""
Author Model

Authors are never created directly by clients. The normalizer upserts a
row the first time a book names an author, keyed by the unique name.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.book import Book


class Author(Base):
    """
    Author model.

    Table: authors

    Relationships:
    - books: Many-to-Many relationship through books_authors

    Indexes:
    - author_name: Unique, the conflict target for upserts
    """

    __tablename__ = "authors"

    author_id: Mapped[int] = mapped_column(primary_key=True)

    # unique=True is what makes concurrent upserts of the same name safe
    author_name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        secondary="books_authors",
        back_populates="authors",
    )

    def __repr__(self) -> str:
        return f"Author(author_id={self.author_id}, author_name='{self.author_name}')"

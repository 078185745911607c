"""
SQLAlchemy Models Package

Model Relationships:
- Author <-> Book: Many-to-Many through the books_authors table

Importing every model here makes them available as
``from catalog.models import Book, Author`` and registers them with
Base.metadata so Alembic discovers them.
"""

from catalog.models.account import Account
from catalog.models.author import Author
from catalog.models.book import Book, books_authors

__all__ = [
    "Account",
    "Author",
    "Book",
    "books_authors",
]

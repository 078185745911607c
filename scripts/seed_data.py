#!/usr/bin/env python3
"""
Database Seed Script

Populates the catalog with sample books for development.

USAGE:
    # Make sure you're in the project root with venv activated
    python scripts/seed_data.py

This script:
1. Connects to the database using catalog settings
2. Clears existing books, links and authors (optional)
3. Inserts sample books through the same code path as POST /books/,
   so authors are upserted and linked exactly as they are for clients
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog.database import SessionLocal, create_tables
from catalog.exceptions import ConflictError
from catalog.models import Author, Book, books_authors
from catalog.schemas import BookEntry
from catalog.services.catalog import create_book

COVERS = "https://images.gr-assets.com/books"

SAMPLE_BOOKS = [
    {
        "isbn13": 9780439023480,
        "authors": "Suzanne Collins",
        "publication": 2008,
        "original_title": "The Hunger Games",
        "title": "The Hunger Games (The Hunger Games, #1)",
        "ratings": {
            "average": 4.34, "count": 4780653,
            "rating_1": 66715, "rating_2": 127936, "rating_3": 560092,
            "rating_4": 1481305, "rating_5": 2706317,
        },
    },
    {
        "isbn13": 9780439554930,
        "authors": "J.K. Rowling, Mary GrandPré",
        "publication": 1997,
        "original_title": "Harry Potter and the Philosopher's Stone",
        "title": "Harry Potter and the Sorcerer's Stone (Harry Potter, #1)",
        "ratings": {
            "average": 4.44, "count": 4602479,
            "rating_1": 75504, "rating_2": 101676, "rating_3": 455024,
            "rating_4": 1156318, "rating_5": 3011543,
        },
    },
    {
        "isbn13": 9780316015840,
        "authors": "Stephenie Meyer",
        "publication": 2005,
        "original_title": "Twilight",
        "title": "Twilight (Twilight, #1)",
        "ratings": {
            "average": 3.57, "count": 3866839,
            "rating_1": 456191, "rating_2": 436802, "rating_3": 793319,
            "rating_4": 875073, "rating_5": 1355439,
        },
    },
    {
        "isbn13": 9780061120080,
        "authors": "Harper Lee",
        "publication": 1960,
        "original_title": "To Kill a Mockingbird",
        "title": "To Kill a Mockingbird",
        "ratings": {
            "average": 4.25, "count": 3198671,
            "rating_1": 60427, "rating_2": 117415, "rating_3": 446835,
            "rating_4": 1001952, "rating_5": 1714267,
        },
    },
    {
        "isbn13": 9780743273560,
        "authors": "F. Scott Fitzgerald",
        "publication": 1925,
        "original_title": "The Great Gatsby",
        "title": "The Great Gatsby",
        "ratings": {
            "average": 3.89, "count": 2683664,
            "rating_1": 86236, "rating_2": 197621, "rating_3": 606158,
            "rating_4": 936012, "rating_5": 947718,
        },
    },
    {
        "isbn13": 9780345339680,
        "authors": "J.R.R. Tolkien",
        "publication": 1937,
        "original_title": "The Hobbit or There and Back Again",
        "title": "The Hobbit",
        "ratings": {
            "average": 4.25, "count": 2071616,
            "rating_1": 46023, "rating_2": 76784, "rating_3": 288649,
            "rating_4": 665635, "rating_5": 1057059,
        },
    },
    {
        "isbn13": 9780451524940,
        "authors": "George Orwell, Erich Fromm, Celâl Üster",
        "publication": 1949,
        "original_title": "Nineteen Eighty-Four",
        "title": "1984",
        "ratings": {
            "average": 4.14, "count": 2115562,
            "rating_1": 41845, "rating_2": 86425, "rating_3": 324874,
            "rating_4": 692021, "rating_5": 1032774,
        },
    },
    {
        "isbn13": 9780451526340,
        "authors": "George Orwell",
        "publication": 1945,
        "original_title": "Animal Farm: A Fairy Story",
        "title": "Animal Farm",
        "ratings": {
            "average": 3.87, "count": 2111750,
            "rating_1": 66854, "rating_2": 135147, "rating_3": 433432,
            "rating_4": 698642, "rating_5": 777675,
        },
    },
    {
        "isbn13": 9780450040180,
        "authors": "Stephen King, Peter Straub",
        "publication": 1984,
        "original_title": "The Talisman",
        "title": "The Talisman (The Talisman, #1)",
        "ratings": {
            "average": 4.13, "count": 97536,
            "rating_1": 2009, "rating_2": 4587, "rating_3": 17427,
            "rating_4": 33578, "rating_5": 39935,
        },
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing catalog data (accounts are kept)."""
    print("Clearing existing data...")
    db.execute(delete(books_authors))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.commit()
    print("Data cleared.")


def create_books(db: Session) -> int:
    """Insert the sample books, skipping any that already exist."""
    print("Creating books...")
    created = 0
    for number, book in enumerate(SAMPLE_BOOKS, start=1):
        entry = BookEntry.model_validate({
            **book,
            "icons": {
                "large": f"{COVERS}/{book['isbn13']}m/{number}.jpg",
                "small": f"{COVERS}/{book['isbn13']}s/{number}.jpg",
            },
        })
        try:
            creation = create_book(db, entry)
        except ConflictError:
            print(f"  - {book['title']} already exists, skipped")
            continue
        if creation.failed_authors:
            print(f"  - {book['title']}: could not link {', '.join(creation.failed_authors)}")
        created += 1

    print(f"Created {created} books.")
    return created


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    # Create tables if they don't exist
    create_tables()

    db = SessionLocal()

    try:
        if clear_existing:
            clear_data(db)

        books = create_books(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Books: {books}")
        print(f"  - Authors: {db.query(Author).count()}")
        print("\nYou can now access the API at http://localhost:8000")
        print("API documentation at http://localhost:8000/docs")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()

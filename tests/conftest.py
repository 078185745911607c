"""
pytest Fixtures for Book Catalog Tests

This file contains shared fixtures used across all test files.

WHAT ARE FIXTURES?
==================
Fixtures are reusable test setup/teardown functions.
They provide:
- Test data (accounts, book entries, stored books)
- Test resources (database engine and session, HTTP client)
- Setup/cleanup logic (create/drop tables)

HOW FIXTURES WORK:
1. pytest discovers fixtures by the @pytest.fixture decorator
2. Tests request fixtures by including them as parameters
3. pytest calls the fixture, provides the return value to the test
4. After the test, cleanup code after yield runs

FIXTURE SCOPES:
Everything here is function scoped. The catalog commits and rolls back
on its own (one commit per author, rollback after a failed link), so
tests cannot be isolated by wrapping them in an outer transaction.
Instead every test gets its own in-memory database.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
# This disables rate limiting and sets a test signing key
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-signing-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from collections.abc import Generator
from copy import deepcopy

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.database import Base, get_db
from catalog.main import app
from catalog.models import Account
from catalog.schemas import BookEntry
from catalog.services.catalog import create_book
from catalog.services.security import create_access_token, hash_password

# =============================================================================
# DATABASE FIXTURES
# =============================================================================
# We use SQLite in-memory for tests because:
# - Fast: No disk I/O, runs in memory
# - Isolated: Each test starts from empty tables
# - Simple: No external database needed
#
# The upserts use SQLite's own INSERT ... ON CONFLICT, so the same code
# paths run here as on PostgreSQL.


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores foreign keys unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps a single connection alive for the engine's lifetime.
    Without it, the in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enable_foreign_keys)

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Create a database session on the test engine."""
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )
    session = TestSessionLocal()

    yield session

    session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with the test database.

    We override the get_db dependency to use our test session.
    This is dependency injection in action!
    """

    def override_get_db():
        """Provide test database session instead of real one."""
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# ACCOUNT FIXTURES
# =============================================================================
@pytest.fixture
def sample_account(db_session: Session) -> Account:
    """Create a sample account for testing."""
    account = Account(
        username="testreader",
        email="testreader@example.com",
        firstname="Test",
        lastname="Reader",
        hashed_password=hash_password("SecurePass123"),
    )
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account


@pytest.fixture
def auth_headers(sample_account: Account) -> dict[str, str]:
    """Authorization header carrying a valid access token for sample_account."""
    token = create_access_token({"sub": str(sample_account.account_id)})
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# BOOK FIXTURES
# =============================================================================
BOOK_ENTRY = {
    "isbn13": 9780450040180,
    "authors": "Stephen King, Peter Straub",
    "publication": 1984,
    "original_title": "The Talisman",
    "title": "The Talisman (The Talisman, #1)",
    "ratings": {
        "average": 4.13,
        "count": 97536,
        "rating_1": 2009,
        "rating_2": 4587,
        "rating_3": 17427,
        "rating_4": 33578,
        "rating_5": 39935,
    },
    "icons": {
        "large": "https://images.gr-assets.com/books/1387655567m/8010.jpg",
        "small": "https://images.gr-assets.com/books/1387655567s/8010.jpg",
    },
}


def make_entry(**overrides) -> dict:
    """A valid book entry dict with some fields replaced."""
    entry = deepcopy(BOOK_ENTRY)
    entry.update(overrides)
    return entry


@pytest.fixture
def entry_factory():
    """The make_entry helper, for tests that need variations of the entry."""
    return make_entry


@pytest.fixture
def book_entry() -> dict:
    """A valid book entry as a client would send it."""
    return make_entry()


@pytest.fixture
def sample_book(db_session: Session, book_entry: dict):
    """Insert book_entry through the catalog service and return the stored view."""
    return create_book(db_session, BookEntry.model_validate(book_entry)).book


@pytest.fixture
def multiple_books(db_session: Session) -> list:
    """
    Insert 5 books with distinct ISBNs, titles and averages.

    ISBNs are 9780000000001..9780000000005, averages 1.5, 2.5, 3.5, 4.0, 4.5.
    Every book is by "Test Author"; even-numbered ones add "Second Author".
    """
    averages = [1.5, 2.5, 3.5, 4.0, 4.5]
    books = []
    for number, average in enumerate(averages, start=1):
        authors = "Test Author, Second Author" if number % 2 == 0 else "Test Author"
        entry = make_entry(
            isbn13=9780000000000 + number,
            authors=authors,
            title=f"Test Book {number}",
            original_title=f"Test Book {number}",
            ratings={**BOOK_ENTRY["ratings"], "average": average},
        )
        books.append(create_book(db_session, BookEntry.model_validate(entry)).book)
    return books

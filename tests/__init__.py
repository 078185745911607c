"""
Test Suite for the Book Catalog API

Test Organization:
- conftest.py: Shared fixtures (test database, client, accounts, books)
- test_books.py: Tests for /api/v1/books endpoints
- test_auth.py: Tests for /api/v1/auth endpoints
- test_authors_normalizer.py: Author splitting and upserts
- test_ratings.py: Rating aggregate validation
- test_pagination.py: Offset pagination defaults
- test_validation.py: Request checks and presence predicates
- test_queries.py: Query builder statements

Running Tests:
    # Run all tests
    pytest

    # Run with coverage
    pytest --cov=catalog --cov-report=html

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""

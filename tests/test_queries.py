"""
Tests for the Query Builder

Statements are executed against the test database, or compiled for
PostgreSQL to check the SQL that production would run.
"""

import pytest
from sqlalchemy.dialects import postgresql

from catalog.services import queries
from catalog.services.queries import RatingOrder


class TestBookView:
    @pytest.mark.usefixtures("multiple_books")
    def test_book_view_one_row_per_book(self, db_session):
        rows = db_session.execute(queries.book_view()).mappings().all()

        assert len(rows) == 5
        assert {row["isbn13"] for row in rows} == {9780000000000 + n for n in range(1, 6)}

    @pytest.mark.usefixtures("multiple_books")
    def test_by_author_aggregates_every_author(self, db_session):
        rows = db_session.execute(queries.by_author("Second Author")).mappings().all()

        for row in rows:
            assert sorted(row["authors"].split(", ")) == ["Second Author", "Test Author"]

    @pytest.mark.usefixtures("multiple_books")
    def test_page_orders_by_isbn(self, db_session):
        rows = db_session.execute(queries.page(limit=3, offset=2)).mappings().all()

        assert [row["isbn13"] for row in rows] == [9780000000003, 9780000000004, 9780000000005]

    @pytest.mark.usefixtures("multiple_books")
    def test_count_books(self, db_session):
        assert db_session.execute(queries.count_books()).scalar_one() == 5


class TestPostgresStatements:
    """Compiled SQL for the production dialect."""

    def test_book_view_uses_string_agg(self):
        sql = str(queries.book_view().compile(dialect=postgresql.dialect()))

        assert "string_agg" in sql
        assert "GROUP BY" in sql

    def test_rating_range_descending(self):
        stmt = queries.by_rating_range(3.5, 5.0, RatingOrder.MAX_FIRST)
        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert "BETWEEN" in sql
        assert "books.rating_avg DESC" in sql

    def test_upsert_author_on_conflict(self):
        stmt = queries.upsert_author("Harper Lee", "postgresql")
        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert "ON CONFLICT (author_name) DO UPDATE" in sql
        assert "RETURNING authors.author_id" in sql

    def test_link_author_do_nothing(self):
        stmt = queries.link_author(1, 2, "postgresql")
        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert "ON CONFLICT DO NOTHING" in sql

    def test_values_are_bound_not_inlined(self):
        stmt = queries.by_title("'; DROP TABLE books; --")
        compiled = stmt.compile(dialect=postgresql.dialect())

        assert "DROP TABLE" not in str(compiled)
        assert "'; DROP TABLE books; --" in compiled.params.values()


class TestUpsertDialects:
    def test_unsupported_dialect(self):
        with pytest.raises(ValueError, match="not supported"):
            queries.upsert_author("Harper Lee", "mysql")

"""
Tests for the Author Normalizer

Covers splitting of author strings and the per-name upsert, run directly
against the service with a database session.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from catalog.models import Author, books_authors
from catalog.services import authors as authors_service
from catalog.services.authors import canonical_authors, normalize, split_authors, upsert_author


class TestSplitAuthors:
    """Tests for split_authors()."""

    def test_split_authors_single(self):
        assert split_authors("Harper Lee") == ["Harper Lee"]

    def test_split_authors_keeps_input_order(self):
        assert split_authors("Stephen King, Peter Straub") == ["Stephen King", "Peter Straub"]

    def test_split_authors_drops_blank_segments(self):
        assert split_authors("Neil Gaiman, , Terry Pratchett, ") == [
            "Neil Gaiman",
            "Terry Pratchett",
        ]

    def test_split_authors_only_splits_on_comma_space(self):
        """A bare comma is part of the name."""
        assert split_authors("Tolkien,J.R.R.") == ["Tolkien,J.R.R."]


class TestCanonicalAuthors:
    def test_canonical_authors_sorted(self):
        assert canonical_authors(["Stephen King", "Peter Straub"]) == "Peter Straub, Stephen King"

    def test_canonical_authors_empty(self):
        assert canonical_authors([]) == ""


class TestUpsertAuthor:
    """Tests for upsert_author()."""

    def test_upsert_author_creates_row(self, db_session):
        author_id = upsert_author(db_session, "Ursula K. Le Guin")

        author = db_session.get(Author, author_id)
        assert author.author_name == "Ursula K. Le Guin"

    def test_upsert_author_reuses_existing_row(self, db_session):
        """Upserting the same name twice returns the same id and one row."""
        first = upsert_author(db_session, "Octavia E. Butler")
        second = upsert_author(db_session, "Octavia E. Butler")

        assert first == second
        count = db_session.execute(
            select(func.count()).select_from(Author).where(Author.author_name == "Octavia E. Butler")
        ).scalar_one()
        assert count == 1

    def test_upsert_author_names_are_case_sensitive(self, db_session):
        assert upsert_author(db_session, "bell hooks") != upsert_author(db_session, "Bell Hooks")


class TestNormalize:
    """Tests for normalize()."""

    def test_normalize_resolves_every_name(self, db_session):
        resolution = normalize(db_session, "Stephen King, Peter Straub")

        assert [ref.name for ref in resolution.refs] == ["Stephen King", "Peter Straub"]
        assert resolution.failed == []
        assert len({ref.author_id for ref in resolution.refs}) == 2

    def test_normalize_failure_does_not_abort(self, db_session, monkeypatch):
        original_upsert = authors_service.upsert_author

        def flaky_upsert(db, name):
            if name == "Peter Straub":
                raise OperationalError("INSERT INTO authors", {}, Exception("database is locked"))
            return original_upsert(db, name)

        monkeypatch.setattr(authors_service, "upsert_author", flaky_upsert)

        resolution = normalize(db_session, "Peter Straub, Stephen King")

        assert [ref.name for ref in resolution.refs] == ["Stephen King"]
        assert resolution.failed == ["Peter Straub"]


class TestSharedAuthors:
    """Books naming the same author share one Author row."""

    @pytest.mark.usefixtures("multiple_books")
    def test_shared_author_single_row_many_links(self, db_session):
        author_ids = db_session.execute(
            select(Author.author_id).where(Author.author_name == "Test Author")
        ).scalars().all()
        assert len(author_ids) == 1

        links = db_session.execute(
            select(func.count())
            .select_from(books_authors)
            .where(books_authors.c.author_id == author_ids[0])
        ).scalar_one()
        assert links == 5

"""
Author Normalizer

Turns the ", "-separated authors string of a book entry into author rows.

Each name is upserted on its own: the insert either creates the author or
returns the id of the existing row with that exact name. Every upsert is
committed before the next one starts, so a failure for one name leaves
the authors already resolved in place and is reported back to the caller
instead of aborting the whole entry.

Names are matched byte for byte. "Stephen King" and "stephen king" are two
different authors.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.services import queries
from catalog.services.queries import AUTHOR_SEPARATOR

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorRef:
    author_id: int
    name: str


@dataclass
class AuthorResolution:
    """Authors resolved to ids, plus the names whose upsert failed."""

    refs: list[AuthorRef] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def split_authors(raw: str) -> list[str]:
    """
    Split an authors string on ", ", dropping empty segments.

    Example:
        >>> split_authors("Stephen King, Peter Straub")
        ['Stephen King', 'Peter Straub']
        >>> split_authors("Neil Gaiman, ")
        ['Neil Gaiman']
    """
    return [name for name in raw.split(AUTHOR_SEPARATOR) if name.strip()]


def canonical_authors(names: Iterable[str]) -> str:
    """Join author names in sorted order, the form every Book view reports."""
    return AUTHOR_SEPARATOR.join(sorted(names))


def upsert_author(db: Session, name: str) -> int:
    """
    Create the author if needed and return its id.

    Commits on success. Concurrent upserts of the same new name both end up
    with the same id because the unique index on author_name arbitrates.
    """
    stmt = queries.upsert_author(name, db.get_bind().dialect.name)
    author_id = db.execute(stmt).scalar_one()
    db.commit()
    return author_id


def normalize(db: Session, raw: str) -> AuthorResolution:
    """
    Resolve every author named in raw.

    Args:
        db: Database session
        raw: Authors string as submitted, e.g. "Stephen King, Peter Straub"

    Returns:
        AuthorResolution listing resolved ids in input order and the names
        that could not be stored
    """
    resolution = AuthorResolution()
    for name in split_authors(raw):
        try:
            author_id = upsert_author(db, name)
        except SQLAlchemyError:
            db.rollback()
            logger.error(f"Author upsert failed for '{name}'", exc_info=True)
            resolution.failed.append(name)
            continue
        resolution.refs.append(AuthorRef(author_id=author_id, name=name))
    return resolution

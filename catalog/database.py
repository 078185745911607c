"""
Database Configuration Module

Sets up SQLAlchemy 2.0 for the catalog.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → check a session out of the factory
2. Every catalog operation in that request receives the session explicitly
3. The session is closed when the request ends, returning its connection
   to the pool

Connections are never shared between concurrent requests: the engine's
pool hands each session its own connection and takes it back on close.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from catalog.config import get_settings

settings = get_settings()


def _engine_options(database_url: str) -> dict:
    """
    Build create_engine() keyword arguments for the configured backend.

    SQLite (used for local experiments) does not take the queue pool
    sizing arguments, so they are only passed to server databases.
    """
    options: dict = {
        "pool_pre_ping": True,  # Verify connections are alive before using
        "echo": settings.debug,  # Log SQL in debug mode
    }
    if make_url(database_url).get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.db_pool_size
        options["max_overflow"] = settings.db_max_overflow
    return options


# =============================================================================
# Database Engine
# =============================================================================
engine = create_engine(settings.database_url, **_engine_options(settings.database_url))


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: the catalog decides when each step is committed
# - autoflush=False: no implicit flushes before queries
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield checks a session out, the route uses it, and the
    finally block closes it even if the route raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def create_tables() -> None:
    """
    Create all database tables.

    WARNING: In production, use Alembic migrations instead!
    """
    Base.metadata.create_all(bind=engine)

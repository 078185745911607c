"""
Migrations for the book catalog.

The database URL comes from catalog settings (DATABASE_URL), never from
alembic.ini, so migrations always hit the same database as the API.

    alembic upgrade head          # create or update the catalog tables
    alembic upgrade head --sql    # print the DDL instead of running it
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context
from catalog.config import get_settings
from catalog.database import Base
import catalog.models  # noqa: F401 - registers books, authors, books_authors, accounts

config = context.config
config.set_main_option("sqlalchemy.url", get_settings().database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Emit the catalog DDL as a SQL script."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

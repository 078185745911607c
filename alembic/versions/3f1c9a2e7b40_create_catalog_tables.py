"""create_catalog_tables

Revision ID: 3f1c9a2e7b40
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2e7b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Accounts (auth routes only)
    op.create_table(
        'accounts',
        sa.Column('account_id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False, comment='Login name'),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('firstname', sa.String(length=255), nullable=False),
        sa.Column('lastname', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=True),
        sa.Column(
            'role',
            sa.Integer(),
            nullable=False,
            comment='Access role, 1 for regular accounts'
        ),
        sa.Column(
            'hashed_password',
            sa.String(length=255),
            nullable=False,
            comment='Bcrypt hashed password'
        ),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False
        ),
        sa.PrimaryKeyConstraint('account_id')
    )
    op.create_index(op.f('ix_accounts_username'), 'accounts', ['username'], unique=True)
    op.create_index(op.f('ix_accounts_email'), 'accounts', ['email'], unique=True)

    # Authors, upserted by name
    op.create_table(
        'authors',
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('author_name', sa.String(length=255), nullable=False, comment="Author's full name"),
        sa.PrimaryKeyConstraint('author_id')
    )
    op.create_index(op.f('ix_authors_author_name'), 'authors', ['author_name'], unique=True)

    # Books, keyed by ISBN-13
    op.create_table(
        'books',
        sa.Column(
            'isbn13',
            sa.BigInteger(),
            autoincrement=False,
            nullable=False,
            comment='13-digit International Standard Book Number'
        ),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column(
            'original_title',
            sa.String(length=500),
            nullable=False,
            comment='Series or canonical edition title'
        ),
        sa.Column(
            'publication_year',
            sa.Integer(),
            nullable=False,
            comment='Year of first publication'
        ),
        sa.Column('rating_avg', sa.Float(), nullable=False, comment='Average rating, 1.0-5.0'),
        sa.Column('rating_count', sa.Integer(), nullable=False),
        sa.Column('rating_1_star', sa.Integer(), nullable=False),
        sa.Column('rating_2_star', sa.Integer(), nullable=False),
        sa.Column('rating_3_star', sa.Integer(), nullable=False),
        sa.Column('rating_4_star', sa.Integer(), nullable=False),
        sa.Column('rating_5_star', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(length=1000), nullable=False, comment='Large cover image URL'),
        sa.Column(
            'image_small_url',
            sa.String(length=1000),
            nullable=False,
            comment='Small cover image URL'
        ),
        sa.PrimaryKeyConstraint('isbn13')
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_rating_avg'), 'books', ['rating_avg'], unique=False)

    # Book <-> author links
    op.create_table(
        'books_authors',
        sa.Column('isbn13', sa.BigInteger(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['authors.author_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['isbn13'], ['books.isbn13'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('isbn13', 'author_id'),
        comment='Association table linking books to their authors'
    )


def downgrade() -> None:
    op.drop_table('books_authors')
    op.drop_index(op.f('ix_books_rating_avg'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_authors_author_name'), table_name='authors')
    op.drop_table('authors')
    op.drop_index(op.f('ix_accounts_email'), table_name='accounts')
    op.drop_index(op.f('ix_accounts_username'), table_name='accounts')
    op.drop_table('accounts')

"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 10:12:41.208533
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('isbn', sa.String(20), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('title_ruby', sa.Text(), nullable=False, server_default=''),
        sa.Column('alt_title', sa.Text(), nullable=False, server_default=''),
        sa.Column('alt_title_ruby', sa.Text(), nullable=False, server_default=''),
        sa.Column('series', sa.Text(), nullable=False, server_default=''),
        sa.Column('series_ruby', sa.Text(), nullable=False, server_default=''),
        sa.Column('creators', sa.Text(), nullable=False, server_default=''),
        sa.Column('publisher', sa.Text(), nullable=False, server_default=''),
        sa.Column('date', sa.String(50), nullable=False, server_default=''),
        sa.Column('price', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pages', sa.String(255), nullable=False, server_default=''),
        sa.Column('ndc', sa.String(20), nullable=False, server_default=''),
        sa.Column('url', sa.String(500), nullable=False, server_default=''),
        sa.Column('location1', sa.String(255), nullable=False, server_default=''),
        sa.Column('location2', sa.String(255), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_books_isbn', 'books', ['isbn'])

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'book_tags',
        sa.Column('book_id', sa.Integer(), sa.ForeignKey('books.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('tag_id', sa.Integer(), sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_index('ix_book_tags_tag_id', 'book_tags', ['tag_id'])


def downgrade() -> None:
    op.drop_index('ix_book_tags_tag_id', table_name='book_tags')
    op.drop_table('book_tags')
    op.drop_table('tags')
    op.drop_index('ix_books_isbn', table_name='books')
    op.drop_table('books')

"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(30)),
        sa.Column('display_name', sa.String(50)),
        sa.Column('bio', sa.String(500)),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('preferred_platforms', sa.JSON(), nullable=False),
        sa.Column('preferred_platforms_updated_at', sa.DateTime(timezone=True)),
        sa.Column('last_selected_platform', sa.String(50)),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), onupdate=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    # User series table
    op.create_table(
        'user_series',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('normalized_title', sa.String(200), nullable=False),
        sa.Column('platform', sa.String(50), nullable=False),
        sa.Column('source_url', sa.String(1000)),
        sa.Column('import_id', sa.String(32)),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('current_chapter', sa.Float(), nullable=False),
        sa.Column('total_chapters', sa.Integer()),
        sa.Column('cover_url', sa.String(1000)),
        sa.Column('genres', sa.JSON(), nullable=False),
        sa.Column('last_read_at', sa.DateTime(timezone=True)),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), onupdate=sa.func.now()),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'normalized_title', name='uq_user_series_title')
    )
    op.create_index('ix_user_series_id', 'user_series', ['id'])
    op.create_index('ix_user_series_user_id', 'user_series', ['user_id'])
    op.create_index('ix_user_series_normalized_title', 'user_series', ['normalized_title'])
    op.create_index('ix_user_series_platform', 'user_series', ['platform'])
    op.create_index('ix_user_series_import_id', 'user_series', ['import_id'])
    op.create_index('ix_user_series_status', 'user_series', ['status'])
    op.create_index('ix_user_series_last_read_at', 'user_series', ['last_read_at'])

    # Reading progress table
    op.create_table(
        'reading_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('series_id', sa.Integer(), nullable=False),
        sa.Column('platform', sa.String(50), nullable=False),
        sa.Column('chapter_number', sa.Float(), nullable=False),
        sa.Column('total_chapters', sa.Integer()),
        sa.Column('scroll_position', sa.Float(), nullable=False),
        sa.Column('resume_url', sa.String(1000)),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['series_id'], ['user_series.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'series_id', 'platform', name='uq_reading_progress_platform')
    )
    op.create_index('ix_reading_progress_id', 'reading_progress', ['id'])
    op.create_index('ix_reading_progress_user_id', 'reading_progress', ['user_id'])
    op.create_index('ix_reading_progress_series_id', 'reading_progress', ['series_id'])


def downgrade() -> None:
    op.drop_table('reading_progress')
    op.drop_table('user_series')
    op.drop_table('users')

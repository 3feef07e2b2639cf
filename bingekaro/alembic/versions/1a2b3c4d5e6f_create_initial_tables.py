"""Create users, favorites and recommendation list tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1a2b3c4d5e6f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=30), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=50), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('avatar_filename', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.Column('last_login_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table(
        'user_favorites',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=10), nullable=False),
        sa.Column('catalog_id', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('year', sa.String(length=20), nullable=True),
        sa.Column('poster', sa.String(length=500), nullable=True),
        sa.Column('genre', sa.String(length=255), nullable=True),
        sa.Column('imdb_rating', sa.Float(), nullable=True),
        sa.Column('added_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'category', 'catalog_id', name='uix_user_category_catalog')
    )
    op.create_index(op.f('ix_user_favorites_id'), 'user_favorites', ['id'], unique=False)
    op.create_index(op.f('ix_user_favorites_user_id'), 'user_favorites', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_favorites_catalog_id'), 'user_favorites', ['catalog_id'], unique=False)

    op.create_table(
        'recommendation_lists',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('creator_id', sa.Integer(), nullable=False),
        sa.Column('is_private', sa.Boolean(), nullable=False),
        sa.Column('secret_hash', sa.String(length=255), nullable=True),
        sa.Column('view_count', sa.Integer(), nullable=False),
        sa.Column('like_count', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_recommendation_lists_id'), 'recommendation_lists', ['id'], unique=False)
    op.create_index(op.f('ix_recommendation_lists_creator_id'), 'recommendation_lists', ['creator_id'], unique=False)
    op.create_index(op.f('ix_recommendation_lists_is_private'), 'recommendation_lists', ['is_private'], unique=False)
    op.create_index(op.f('ix_recommendation_lists_created_at'), 'recommendation_lists', ['created_at'], unique=False)

    op.create_table(
        'list_items',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('list_id', sa.Integer(), nullable=False),
        sa.Column('catalog_id', sa.String(length=20), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('media_type', sa.String(length=10), nullable=False),
        sa.Column('year', sa.String(length=20), nullable=True),
        sa.Column('poster', sa.String(length=500), nullable=True),
        sa.Column('genre', sa.String(length=255), nullable=True),
        sa.Column('plot', sa.Text(), nullable=True),
        sa.Column('imdb_rating', sa.Float(), nullable=True),
        sa.Column('notes', sa.String(length=200), nullable=True),
        sa.Column('added_by_id', sa.Integer(), nullable=True),
        sa.Column('added_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['list_id'], ['recommendation_lists.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['added_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_list_items_id'), 'list_items', ['id'], unique=False)
    op.create_index(op.f('ix_list_items_list_id'), 'list_items', ['list_id'], unique=False)
    op.create_index(op.f('ix_list_items_catalog_id'), 'list_items', ['catalog_id'], unique=False)

    op.create_table(
        'list_tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('list_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['list_id'], ['recommendation_lists.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_list_tags_id'), 'list_tags', ['id'], unique=False)
    op.create_index(op.f('ix_list_tags_list_id'), 'list_tags', ['list_id'], unique=False)
    op.create_index(op.f('ix_list_tags_name'), 'list_tags', ['name'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_list_tags_name'), table_name='list_tags')
    op.drop_index(op.f('ix_list_tags_list_id'), table_name='list_tags')
    op.drop_index(op.f('ix_list_tags_id'), table_name='list_tags')
    op.drop_table('list_tags')

    op.drop_index(op.f('ix_list_items_catalog_id'), table_name='list_items')
    op.drop_index(op.f('ix_list_items_list_id'), table_name='list_items')
    op.drop_index(op.f('ix_list_items_id'), table_name='list_items')
    op.drop_table('list_items')

    op.drop_index(op.f('ix_recommendation_lists_created_at'), table_name='recommendation_lists')
    op.drop_index(op.f('ix_recommendation_lists_is_private'), table_name='recommendation_lists')
    op.drop_index(op.f('ix_recommendation_lists_creator_id'), table_name='recommendation_lists')
    op.drop_index(op.f('ix_recommendation_lists_id'), table_name='recommendation_lists')
    op.drop_table('recommendation_lists')

    op.drop_index(op.f('ix_user_favorites_catalog_id'), table_name='user_favorites')
    op.drop_index(op.f('ix_user_favorites_user_id'), table_name='user_favorites')
    op.drop_index(op.f('ix_user_favorites_id'), table_name='user_favorites')
    op.drop_table('user_favorites')

    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

"""add_projects_and_video_tags

Revision ID: 5c1e7a9d2b34
Revises:
Create Date: 2026-10-19 10:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1e7a9d2b34'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    video_columns = [c['name'] for c in inspector.get_columns('videos')]
    if 'tags' not in video_columns:
        op.add_column(
            'videos',
            sa.Column('tags', sa.ARRAY(sa.String()), nullable=False, server_default='{}'),
        )
    if 'duration_text' not in video_columns:
        op.add_column('videos', sa.Column('duration_text', sa.String(), nullable=True))

    if 'projects' not in inspector.get_table_names():
        op.create_table(
            'projects',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
            sa.Column('title', sa.String(), nullable=False, server_default='Untitled Project'),
            sa.Column('timeline', postgresql.JSONB(), nullable=False, server_default='[]'),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        )
        op.create_index('ix_projects_user_id_updated_at', 'projects', ['user_id', 'updated_at'])


def downgrade() -> None:
    op.drop_index('ix_projects_user_id_updated_at', table_name='projects')
    op.drop_table('projects')
    op.drop_column('videos', 'duration_text')
    op.drop_column('videos', 'tags')

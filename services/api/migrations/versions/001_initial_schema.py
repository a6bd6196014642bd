"""Initial schema for programs, program days and prayer requests

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create programs table
    op.create_table(
        'programs',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('slug', sa.String(100), unique=True, nullable=False, index=True),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('icon', sa.String(10), nullable=False, server_default='📖'),
        sa.Column('image_url', sa.Text, nullable=True),
        sa.Column('color', sa.String(20), nullable=False, server_default='#3478F6'),
        sa.Column('category', sa.String(80), nullable=False, server_default='christian-formation'),
        sa.Column('version', sa.String(20), nullable=False, server_default='1.0.0'),
        sa.Column('total_days', sa.Integer, nullable=False, server_default='0'),
        sa.Column('duration', sa.String(50), nullable=True),
        sa.Column('level', sa.String(30), nullable=False, server_default='basic'),
        sa.Column('published', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # Create program_days table
    op.create_table(
        'program_days',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('program_id', sa.Integer, sa.ForeignKey('programs.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('day_number', sa.Integer, nullable=False),
        sa.Column('title', sa.Text, nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('scripture_reference', sa.String(100), nullable=True),
        sa.Column('scripture_text', sa.Text, nullable=True),
        sa.Column('reflection', sa.Text, nullable=True),
        sa.Column('activity_title', sa.String(200), nullable=True),
        sa.Column('activity_description', sa.Text, nullable=True),
        sa.Column('audio_url', sa.Text, nullable=True),
        sa.Column('video_url', sa.Text, nullable=True),
        sa.Column('fasting_instructions', sa.Text, nullable=True),
        sa.Column('readings', sa.JSON, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    # Create prayer_requests table
    op.create_table(
        'prayer_requests',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('request', sa.Text, nullable=False),
        sa.Column('author', sa.Text, nullable=False),
        sa.Column('status', sa.String(30), nullable=False, server_default='pending', index=True),
        sa.Column('prayer_count', sa.Integer, nullable=False, server_default='0'),
        sa.Column('private', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('category', sa.String(80), nullable=False, server_default='general'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('prayer_requests')
    op.drop_table('program_days')
    op.drop_table('programs')

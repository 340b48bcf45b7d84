"""Add habits table

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

frequency_type = sa.Enum('DAILY', 'WEEKLY', 'MONTHLY', name='frequencytype')
habit_status = sa.Enum('ACTIVE', 'INACTIVE', 'COMPLETED', name='habitstatus')


def upgrade() -> None:
    """Create habits table."""
    op.create_table('habits', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=200), nullable=True),
        sa.Column('frequency_type', frequency_type, nullable=False),
        sa.Column('week_days', sa.JSON(), nullable=True),
        sa.Column('month_days', sa.JSON(), nullable=True),
        sa.Column('scheduled_time', sqlmodel.sql.sqltypes.AutoString(length=5), nullable=True),
        sa.Column('estimated_minutes', sa.Integer(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('status', habit_status, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_habits_owner_id'), 'habits', ['owner_id'], unique=False)
    op.create_index(op.f('ix_habits_start_date'), 'habits', ['start_date'], unique=False)
    op.create_index(op.f('ix_habits_category_id'), 'habits', ['category_id'], unique=False)
    op.create_index(op.f('ix_habits_status'), 'habits', ['status'], unique=False)


def downgrade() -> None:
    """Drop habits table."""
    op.drop_index(op.f('ix_habits_status'), table_name='habits')
    op.drop_index(op.f('ix_habits_category_id'), table_name='habits')
    op.drop_index(op.f('ix_habits_start_date'), table_name='habits')
    op.drop_index(op.f('ix_habits_owner_id'), table_name='habits')
    op.drop_table('habits')
    frequency_type.drop(op.get_bind(), checkfirst=True)
    habit_status.drop(op.get_bind(), checkfirst=True)

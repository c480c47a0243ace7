# alembic/versions/0001_initial.py

"""Initial tables: users, achievements, tournament registrations, schedules

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-16 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=64), primary_key=True, comment="Internal User ID"),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=32), nullable=False, server_default='Player'),
        sa.Column('sport', sa.String(length=64), nullable=True),
        sa.Column('name', sa.String(length=128), nullable=True, comment="User display name"),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('gender', sa.String(length=32), nullable=True),
        sa.Column('mobile', sa.String(length=10), nullable=True),
        sa.Column('profile_pic', sa.String(length=512), nullable=True),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('bloodgroup', sa.String(length=8), nullable=True),
        sa.Column('address', sa.String(length=512), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_sport', 'users', ['sport'])

    op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('owner_id', sa.String(length=64),
                  sa.ForeignKey('users.id', ondelete='CASCADE', name='fk_achievements_owner_id'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('proof', sa.Text(), nullable=True, comment="Opaque reference to the proof document"),
        sa.Column('sport', sa.String(length=64), nullable=False),
        sa.Column('venue', sa.String(length=200), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('decision_reason', sa.Text(), nullable=True),
        sa.Column('verified_by_id', sa.String(length=64),
                  sa.ForeignKey('users.id', ondelete='SET NULL', name='fk_achievements_verified_by_id'), nullable=True),
        sa.Column('verified_by_name', sa.String(length=64), nullable=True),
        sa.Column('verified_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_achievements_id', 'achievements', ['id'])
    op.create_index('ix_achievements_owner_id', 'achievements', ['owner_id'])
    op.create_index('ix_achievements_created_at', 'achievements', ['created_at'])
    op.create_index('ix_achievements_sport_status', 'achievements', ['sport', 'status'])

    op.create_table(
        'tournament_registrations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('player_id', sa.String(length=64), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tournament_name', sa.String(length=200), nullable=False),
        sa.Column('reg_status', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_tournament_registrations_id', 'tournament_registrations', ['id'])
    op.create_index('ix_tournament_registrations_player_id', 'tournament_registrations', ['player_id'])
    op.create_index('ix_tournament_registrations_reg_status', 'tournament_registrations', ['reg_status'])

    op.create_table(
        'schedules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('coach_id', sa.String(length=64), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_schedules_id', 'schedules', ['id'])
    op.create_index('ix_schedules_coach_id', 'schedules', ['coach_id'])
    op.create_index('ix_schedules_date', 'schedules', ['date'])

    op.create_table(
        'schedule_requests',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('schedule_id', sa.Integer(), sa.ForeignKey('schedules.id', ondelete='CASCADE'), nullable=False),
        sa.Column('player_id', sa.String(length=64), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_schedule_requests_id', 'schedule_requests', ['id'])
    op.create_index('ix_schedule_requests_player_id', 'schedule_requests', ['player_id'])
    op.create_index('ix_schedule_requests_schedule_created', 'schedule_requests', ['schedule_id', 'created_at'])


def downgrade() -> None:
    op.drop_table('schedule_requests')
    op.drop_table('schedules')
    op.drop_table('tournament_registrations')
    op.drop_table('achievements')
    op.drop_table('users')

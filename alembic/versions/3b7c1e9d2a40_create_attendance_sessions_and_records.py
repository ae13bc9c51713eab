"""create attendance_sessions and attendance_records tables

Revision ID: 3b7c1e9d2a40
Revises:
Create Date: 2026-10-19 10:12:44.118402
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3b7c1e9d2a40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema: create attendance_sessions and attendance_records"""
    op.create_table(
        'attendance_sessions',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('issuer_id', sa.String(length=128), nullable=False),
        sa.Column('issuer_email', sa.String(length=255), nullable=True),
        sa.Column('label', sa.Text(), nullable=False),
        sa.Column('origin_latitude', sa.Float(), nullable=False),
        sa.Column('origin_longitude', sa.Float(), nullable=False),
        sa.Column('radius_meters', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.CheckConstraint('expires_at > created_at', name='ck_session_expiry_after_creation'),
    )
    op.create_index('ix_attendance_sessions_issuer_id', 'attendance_sessions', ['issuer_id'])
    op.create_index('ix_attendance_sessions_created_at', 'attendance_sessions', ['created_at'])

    op.create_table(
        'attendance_records',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('session_id', sa.String(length=64), nullable=False),
        sa.Column('claimant_id', sa.String(length=128), nullable=False),
        sa.Column('claimant_email', sa.String(length=255), nullable=True),
        sa.Column('label', sa.Text(), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('accuracy_meters', sa.Float(), nullable=True),
        sa.Column('distance_meters', sa.Integer(), nullable=False),
        sa.Column('recorded_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['attendance_sessions.id']),
        sa.UniqueConstraint('session_id', 'claimant_id', name='uq_attendance_session_claimant'),
    )
    op.create_index('ix_attendance_records_claimant_id', 'attendance_records', ['claimant_id'])
    op.create_index('ix_attendance_session_recorded', 'attendance_records', ['session_id', 'recorded_at'])


def downgrade() -> None:
    """Downgrade schema: drop attendance tables"""
    op.drop_index('ix_attendance_session_recorded', table_name='attendance_records')
    op.drop_index('ix_attendance_records_claimant_id', table_name='attendance_records')
    op.drop_table('attendance_records')
    op.drop_index('ix_attendance_sessions_created_at', table_name='attendance_sessions')
    op.drop_index('ix_attendance_sessions_issuer_id', table_name='attendance_sessions')
    op.drop_table('attendance_sessions')

"""Initial repair scheduling schema

Revision ID: 3f2a9c1d7b40
Revises: 
Create Date: 2026-10-19 09:12:41.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Create technicians table
    op.create_table(
        'technicians',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('specialties', sa.JSON(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('region', sa.String(length=100), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('commune', sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_technicians_region', 'technicians', ['region'])

    # Days whose calendar has been written; absent means every slot is open
    op.create_table(
        'technician_calendar_days',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('technician_id', sa.Uuid(), nullable=False),
        sa.Column('calendar_date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['technician_id'], ['technicians.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('technician_id', 'calendar_date', name='uq_calendar_day_technician_date')
    )
    op.create_index('ix_technician_calendar_days_technician_id', 'technician_calendar_days', ['technician_id'])

    # Open slots; a row disappears when the slot is booked
    op.create_table(
        'technician_availability_slots',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('technician_id', sa.Uuid(), nullable=False),
        sa.Column('available_date', sa.Date(), nullable=False),
        sa.Column('time_slot', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['technician_id'], ['technicians.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('technician_id', 'available_date', 'time_slot', name='uq_availability_technician_date_slot')
    )
    op.create_index('ix_technician_availability_slots_technician_id', 'technician_availability_slots', ['technician_id'])
    op.create_index('ix_technician_availability_slots_available_date', 'technician_availability_slots', ['available_date'])

    # Create repair_requests table
    op.create_table(
        'repair_requests',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('device_type', sa.String(length=100), nullable=False),
        sa.Column('device_brand', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('device_model', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('issue_description', sa.Text(), nullable=False),
        sa.Column('urgency_level', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('estimated_cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(12, 2), nullable=True),
        sa.Column('technician_id', sa.Uuid(), nullable=True),
        sa.Column('appointment_id', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['technician_id'], ['technicians.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_repair_requests_user_id', 'repair_requests', ['user_id'])
    op.create_index('ix_repair_requests_status', 'repair_requests', ['status'])
    op.create_index('ix_repair_requests_technician_id', 'repair_requests', ['technician_id'])

    # Create repair_appointments table
    op.create_table(
        'repair_appointments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('repair_request_id', sa.Uuid(), nullable=False),
        sa.Column('technician_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('time_slot', sa.String(length=20), nullable=False),
        sa.Column('street', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('commune', sa.String(length=100), nullable=False),
        sa.Column('region', sa.String(length=100), nullable=False),
        sa.Column('postal_code', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='scheduled'),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['repair_request_id'], ['repair_requests.id']),
        sa.ForeignKeyConstraint(['technician_id'], ['technicians.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_repair_appointments_repair_request_id', 'repair_appointments', ['repair_request_id'])
    op.create_index('ix_repair_appointments_technician_id', 'repair_appointments', ['technician_id'])
    op.create_index('ix_repair_appointments_user_id', 'repair_appointments', ['user_id'])
    op.create_index('ix_repair_appointments_scheduled_date', 'repair_appointments', ['scheduled_date'])
    op.create_index('ix_repair_appointments_status', 'repair_appointments', ['status'])
    # One live appointment per technician slot
    op.create_index(
        'uq_appointment_active_slot',
        'repair_appointments',
        ['technician_id', 'scheduled_date', 'time_slot'],
        unique=True,
        postgresql_where=sa.text("status != 'cancelled'"),
    )

    # Create repair_estimates table
    op.create_table(
        'repair_estimates',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('repair_request_id', sa.Uuid(), nullable=False),
        sa.Column('technician_id', sa.Uuid(), nullable=False),
        sa.Column('estimated_cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('estimated_duration_hours', sa.Float(), nullable=False),
        sa.Column('labor_cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('parts_needed', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('valid_until', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['repair_request_id'], ['repair_requests.id']),
        sa.ForeignKeyConstraint(['technician_id'], ['technicians.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_repair_estimates_repair_request_id', 'repair_estimates', ['repair_request_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('repair_estimates')
    op.drop_index('uq_appointment_active_slot', table_name='repair_appointments')
    op.drop_table('repair_appointments')
    op.drop_table('repair_requests')
    op.drop_table('technician_availability_slots')
    op.drop_table('technician_calendar_days')
    op.drop_table('technicians')

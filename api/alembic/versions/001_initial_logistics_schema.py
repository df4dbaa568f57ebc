"""initial_logistics_schema

Revision ID: 001
Revises:
Create Date: 2026-10-12 10:04:51.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('organizations',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('contact_person', sa.String(length=255), nullable=True),
    sa.Column('phone', sa.String(length=32), nullable=True),
    sa.Column('authorized_priorities', sa.JSON(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_organizations_email'), 'organizations', ['email'], unique=True)

    op.create_table('drivers',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('organization_id', sa.String(length=36), nullable=True),
    sa.Column('phone', sa.String(length=32), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('vehicle_plate', sa.String(length=16), nullable=False),
    sa.Column('vehicle_type', sa.String(length=20), nullable=False),
    sa.Column('company', sa.String(length=255), nullable=True),
    sa.Column('push_token', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('verified', sa.Boolean(), nullable=False),
    *_timestamps(),
    sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_drivers_organization_id'), 'drivers', ['organization_id'], unique=False)
    op.create_index(op.f('ix_drivers_phone'), 'drivers', ['phone'], unique=True)
    op.create_index(op.f('ix_drivers_vehicle_plate'), 'drivers', ['vehicle_plate'], unique=False)

    op.create_table('permits',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('driver_id', sa.String(length=36), nullable=False),
    sa.Column('slot_id', sa.String(length=36), nullable=True),
    sa.Column('vessel_id', sa.String(length=36), nullable=True),
    sa.Column('qr_code', sa.String(length=255), nullable=True),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('priority', sa.String(length=20), nullable=False),
    sa.Column('cargo_type', sa.String(length=50), nullable=True),
    sa.Column('rescheduled_count', sa.Integer(), nullable=False),
    sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('halted_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('notes', sa.Text(), nullable=True),
    *_timestamps(),
    sa.ForeignKeyConstraint(['driver_id'], ['drivers.id']),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_permits_driver_id'), 'permits', ['driver_id'], unique=False)
    op.create_index(op.f('ix_permits_status'), 'permits', ['status'], unique=False)

    op.create_table('jobs',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('organization_id', sa.String(length=36), nullable=False),
    sa.Column('job_number', sa.String(length=64), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('assigned_driver_id', sa.String(length=36), nullable=True),
    sa.Column('vessel_name', sa.String(length=255), nullable=True),
    sa.Column('priority', sa.String(length=20), nullable=False),
    *_timestamps(),
    sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
    sa.ForeignKeyConstraint(['assigned_driver_id'], ['drivers.id']),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_jobs_organization_id'), 'jobs', ['organization_id'], unique=False)

    op.create_table('priority_rules',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('cargo_type', sa.String(length=50), nullable=False),
    sa.Column('priority_level', sa.String(length=20), nullable=False),
    sa.Column('max_delay_minutes', sa.Integer(), nullable=False),
    sa.Column('can_be_halted', sa.Boolean(), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('color_code', sa.String(length=16), nullable=True),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('cargo_type')
    )

    op.create_table('vessel_schedules',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('vessel_name', sa.String(length=255), nullable=False),
    sa.Column('arrival_date', sa.Date(), nullable=False),
    sa.Column('arrival_time', sa.Time(), nullable=True),
    sa.Column('berth', sa.String(length=16), nullable=True),
    sa.Column('estimated_trucks', sa.Integer(), nullable=False),
    sa.Column('estimated_containers', sa.Integer(), nullable=True),
    sa.Column('actual_trucks', sa.Integer(), nullable=False),
    sa.Column('cargo_types', sa.JSON(), nullable=True),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('source', sa.String(length=20), nullable=False),
    sa.Column('external_vessel_id', sa.String(length=64), nullable=True),
    sa.Column('synced_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('notes', sa.Text(), nullable=True),
    *_timestamps(),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('vessel_name', 'arrival_date', name='uq_vessel_schedules_name_date')
    )
    op.create_index(op.f('ix_vessel_schedules_vessel_name'), 'vessel_schedules', ['vessel_name'], unique=False)
    op.create_index(op.f('ix_vessel_schedules_arrival_date'), 'vessel_schedules', ['arrival_date'], unique=False)
    op.create_index(op.f('ix_vessel_schedules_external_vessel_id'), 'vessel_schedules', ['external_vessel_id'], unique=False)

    op.create_table('api_integrations',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('organization_id', sa.String(length=36), nullable=False),
    sa.Column('api_type', sa.String(length=32), nullable=False),
    sa.Column('api_endpoint', sa.Text(), nullable=False),
    sa.Column('api_key', sa.Text(), nullable=True),
    sa.Column('webhook_secret', sa.Text(), nullable=True),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('sync_frequency_minutes', sa.Integer(), nullable=False),
    sa.Column('last_sync_at', sa.DateTime(timezone=True), nullable=True),
    sa.Column('last_sync_status', sa.String(length=20), nullable=True),
    sa.Column('last_sync_error', sa.Text(), nullable=True),
    *_timestamps(),
    sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('organization_id', 'api_type', name='uq_api_integrations_org_type')
    )
    op.create_index(op.f('ix_api_integrations_organization_id'), 'api_integrations', ['organization_id'], unique=False)
    op.create_index(op.f('ix_api_integrations_is_active'), 'api_integrations', ['is_active'], unique=False)

    op.create_table('organization_vessel_tracking',
    sa.Column('id', sa.String(length=36), nullable=False),
    sa.Column('organization_id', sa.String(length=36), nullable=False),
    sa.Column('vessel_name', sa.String(length=255), nullable=False),
    sa.Column('vessel_id', sa.String(length=36), nullable=True),
    sa.Column('arrival_date', sa.Date(), nullable=False),
    sa.Column('arrival_time', sa.Time(), nullable=True),
    sa.Column('estimated_containers', sa.Integer(), nullable=False),
    sa.Column('estimated_trucks', sa.Integer(), nullable=False),
    sa.Column('shipment_numbers', sa.JSON(), nullable=False),
    sa.Column('container_numbers', sa.JSON(), nullable=False),
    sa.Column('cargo_types', sa.JSON(), nullable=False),
    sa.Column('priority_breakdown', sa.JSON(), nullable=False),
    sa.Column('source', sa.String(length=20), nullable=False),
    sa.Column('api_integration_id', sa.String(length=36), nullable=True),
    sa.Column('synced_at', sa.DateTime(timezone=True), nullable=True),
    *_timestamps(),
    sa.ForeignKeyConstraint(['organization_id'], ['organizations.id']),
    sa.ForeignKeyConstraint(['api_integration_id'], ['api_integrations.id']),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('organization_id', 'vessel_name', 'arrival_date', name='uq_org_vessel_tracking_org_name_date')
    )
    op.create_index(op.f('ix_organization_vessel_tracking_organization_id'), 'organization_vessel_tracking', ['organization_id'], unique=False)

    op.create_table('api_sync_logs',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('api_integration_id', sa.String(length=36), nullable=True),
    sa.Column('sync_type', sa.String(length=20), nullable=False),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('records_synced', sa.Integer(), nullable=False),
    sa.Column('errors', sa.JSON(), nullable=True),
    sa.Column('duration_ms', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.ForeignKeyConstraint(['api_integration_id'], ['api_integrations.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )

    op.create_table('traffic_updates',
    sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
    sa.Column('camera_id', sa.String(length=64), nullable=False),
    sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
    sa.Column('vehicle_count', sa.Integer(), nullable=False),
    sa.Column('truck_count', sa.Integer(), nullable=False),
    sa.Column('car_count', sa.Integer(), nullable=True),
    sa.Column('status', sa.String(length=20), nullable=False),
    sa.Column('density_score', sa.Float(), nullable=True),
    sa.Column('recommendation', sa.Text(), nullable=True),
    sa.Column('processed', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_traffic_updates_camera_id'), 'traffic_updates', ['camera_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_traffic_updates_camera_id'), table_name='traffic_updates')
    op.drop_table('traffic_updates')
    op.drop_table('api_sync_logs')
    op.drop_index(op.f('ix_organization_vessel_tracking_organization_id'), table_name='organization_vessel_tracking')
    op.drop_table('organization_vessel_tracking')
    op.drop_index(op.f('ix_api_integrations_is_active'), table_name='api_integrations')
    op.drop_index(op.f('ix_api_integrations_organization_id'), table_name='api_integrations')
    op.drop_table('api_integrations')
    op.drop_index(op.f('ix_vessel_schedules_external_vessel_id'), table_name='vessel_schedules')
    op.drop_index(op.f('ix_vessel_schedules_arrival_date'), table_name='vessel_schedules')
    op.drop_index(op.f('ix_vessel_schedules_vessel_name'), table_name='vessel_schedules')
    op.drop_table('vessel_schedules')
    op.drop_table('priority_rules')
    op.drop_index(op.f('ix_jobs_organization_id'), table_name='jobs')
    op.drop_table('jobs')
    op.drop_index(op.f('ix_permits_status'), table_name='permits')
    op.drop_index(op.f('ix_permits_driver_id'), table_name='permits')
    op.drop_table('permits')
    op.drop_index(op.f('ix_drivers_vehicle_plate'), table_name='drivers')
    op.drop_index(op.f('ix_drivers_phone'), table_name='drivers')
    op.drop_index(op.f('ix_drivers_organization_id'), table_name='drivers')
    op.drop_table('drivers')
    op.drop_index(op.f('ix_organizations_email'), table_name='organizations')
    op.drop_table('organizations')

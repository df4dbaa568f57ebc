"""job_booking_columns

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 09:12:37.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, Sequence[str], None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_NEW_COLUMNS = [
    ('customer_name', sa.String(length=255)),
    ('container_number', sa.String(length=32)),
    ('cargo_type', sa.String(length=50)),
    ('pickup_location', sa.String(length=255)),
    ('destination', sa.String(length=255)),
    ('preferred_date', sa.Date()),
    ('preferred_time', sa.Time()),
    ('notes', sa.Text()),
    ('permit_id', sa.String(length=36)),
    ('assigned_at', sa.DateTime(timezone=True)),
    ('completed_at', sa.DateTime(timezone=True)),
]


def upgrade() -> None:
    """Campos de creacion y asignacion de trabajos."""
    with op.batch_alter_table('jobs') as batch_op:
        for name, type_ in _NEW_COLUMNS:
            batch_op.add_column(sa.Column(name, type_, nullable=True))
        batch_op.add_column(
            sa.Column('container_count', sa.Integer(), server_default='1', nullable=False)
        )
        batch_op.create_index(batch_op.f('ix_jobs_status'), ['status'], unique=False)
        batch_op.create_index(batch_op.f('ix_jobs_preferred_date'), ['preferred_date'], unique=False)


def downgrade() -> None:
    with op.batch_alter_table('jobs') as batch_op:
        batch_op.drop_index(batch_op.f('ix_jobs_preferred_date'))
        batch_op.drop_index(batch_op.f('ix_jobs_status'))
        batch_op.drop_column('container_count')
        for name, _ in reversed(_NEW_COLUMNS):
            batch_op.drop_column(name)

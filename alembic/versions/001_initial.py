"""Initial migration

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create restaurants table
    op.create_table(
        'restaurants',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create tables table
    op.create_table(
        'tables',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('num_seats_available', sa.Integer(), nullable=False),
        sa.Column('num_seats_reserved', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint(
            'num_seats_reserved >= 0 AND num_seats_reserved <= num_seats_available',
            name='ck_tables_seats_reserved_range',
        ),
    )

    # Create user_reservations table
    op.create_table(
        'user_reservations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('table_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tables.id'), nullable=False),
        sa.Column('profile_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('num_seats', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create user_reservations_canceled table
    op.create_table(
        'user_reservations_canceled',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('restaurant_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurants.id'), nullable=False),
        sa.Column('table_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('tables.id'), nullable=False),
        sa.Column('profile_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('num_seats', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_tables_restaurant_id', 'tables', ['restaurant_id'])
    op.create_index('ix_user_reservations_table_id', 'user_reservations', ['table_id'])
    op.create_index('ix_user_reservations_profile_id', 'user_reservations', ['profile_id'])
    op.create_index('ix_user_reservations_canceled_table_id', 'user_reservations_canceled', ['table_id'])
    op.create_index('ix_user_reservations_canceled_profile_id', 'user_reservations_canceled', ['profile_id'])


def downgrade() -> None:
    op.drop_index('ix_user_reservations_canceled_profile_id')
    op.drop_index('ix_user_reservations_canceled_table_id')
    op.drop_index('ix_user_reservations_profile_id')
    op.drop_index('ix_user_reservations_table_id')
    op.drop_index('ix_tables_restaurant_id')

    op.drop_table('user_reservations_canceled')
    op.drop_table('user_reservations')
    op.drop_table('tables')
    op.drop_table('restaurants')

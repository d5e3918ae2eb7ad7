"""Initial marketplace schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

FREQUENCY_VALUES = ('weekly', 'biweekly', 'monthly')
STATUS_VALUES = ('active', 'paused', 'cancelled')


def upgrade() -> None:
    op.create_table('farms',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.Text(), nullable=True),
        sa.Column('state', sa.String(length=64), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('image_urls', sa.JSON(), nullable=True),
        sa.Column('price_per_week', sa.Float(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_farms_user_id'), 'farms', ['user_id'], unique=False)
    op.create_index('idx_farms_created_at_id', 'farms', ['created_at', 'id'], unique=False)

    op.create_table('farm_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('farm_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('farm_id', 'name', name='uq_farm_category')
    )
    op.create_index('idx_farm_categories_name', 'farm_categories', ['name'], unique=False)

    op.create_table('farm_delivery_options',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('farm_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('farm_id', 'name', name='uq_farm_delivery_option')
    )
    op.create_index(
        'idx_farm_delivery_options_name', 'farm_delivery_options', ['name'], unique=False
    )

    op.create_table('csa_shares',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('farm_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('frequency', sa.Enum(*FREQUENCY_VALUES, name='frequency'), nullable=False),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('end_date', sa.DateTime(), nullable=True),
        sa.Column('max_subscribers', sa.Integer(), nullable=True),
        sa.Column('current_subscribers', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_csa_shares_farm_id'), 'csa_shares', ['farm_id'], unique=False)

    op.create_table('subscriptions',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('share_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.Enum(*STATUS_VALUES, name='status'), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=True),
        sa.Column('next_delivery_date', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['share_id'], ['csa_shares.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_subscriptions_user_id'), 'subscriptions', ['user_id'], unique=False)
    op.create_index(
        op.f('ix_subscriptions_share_id'), 'subscriptions', ['share_id'], unique=False
    )


def downgrade() -> None:
    op.drop_table('subscriptions')
    op.drop_table('csa_shares')
    op.drop_table('farm_delivery_options')
    op.drop_table('farm_categories')
    op.drop_table('farms')
    sa.Enum(name='status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='frequency').drop(op.get_bind(), checkfirst=True)

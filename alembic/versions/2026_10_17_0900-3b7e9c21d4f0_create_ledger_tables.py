"""create ledger tables

Revision ID: 3b7e9c21d4f0
Revises:
Create Date: 2026-10-17 09:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7e9c21d4f0'
down_revision = None
branch_labels = None
depends_on = None

# Exact integer amounts are stored as decimal strings (see fleetshare.db.types.UInt256)
UINT256 = sa.String(length=78)


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('is_superuser', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    # Create assets table
    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('image_ref', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('total_shares', sa.Integer(), nullable=False),
        sa.Column('available_shares', sa.Integer(), nullable=False),
        sa.Column('price_per_unit', UINT256, nullable=False),
        sa.Column('cumulative_revenue', UINT256, nullable=False, server_default='0'),
        sa.Column('cumulative_expense', UINT256, nullable=False, server_default='0'),
        sa.Column('accumulator', UINT256, nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('total_shares > 0', name='ck_assets_total_shares_positive'),
        sa.CheckConstraint(
            'available_shares >= 0 AND available_shares <= total_shares',
            name='ck_assets_available_shares_range',
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_assets_id'), 'assets', ['id'], unique=False)

    # Create holdings table
    op.create_table(
        'holdings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('holder_id', sa.Integer(), nullable=False),
        sa.Column('units', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('debt', UINT256, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.CheckConstraint('units >= 0', name='ck_holdings_units_non_negative'),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['holder_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('asset_id', 'holder_id', name='uq_holding_asset_holder')
    )
    op.create_index(op.f('ix_holdings_asset_id'), 'holdings', ['asset_id'], unique=False)
    op.create_index(op.f('ix_holdings_holder_id'), 'holdings', ['holder_id'], unique=False)

    # Create treasury table (single row)
    op.create_table(
        'treasury',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('balance', UINT256, nullable=False, server_default='0'),
        sa.Column('total_in', UINT256, nullable=False, server_default='0'),
        sa.Column('total_out', UINT256, nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.PrimaryKeyConstraint('id')
    )

    # Create fund_movements table
    op.create_table(
        'fund_movements',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('direction', sa.String(length=8), nullable=False),
        sa.Column('reason', sa.String(length=32), nullable=False),
        sa.Column('counterparty_id', sa.Integer(), nullable=True),
        sa.Column('asset_id', sa.Integer(), nullable=True),
        sa.Column('amount', UINT256, nullable=False),
        sa.Column('memo', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['counterparty_id'], ['users.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_fund_movements_counterparty_id'), 'fund_movements', ['counterparty_id'], unique=False)
    op.create_index(op.f('ix_fund_movements_asset_id'), 'fund_movements', ['asset_id'], unique=False)

    # Create ledger_events table
    op.create_table(
        'ledger_events',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event_type', sa.String(length=32), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=True),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('payload', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ledger_events_event_type'), 'ledger_events', ['event_type'], unique=False)
    op.create_index(op.f('ix_ledger_events_asset_id'), 'ledger_events', ['asset_id'], unique=False)
    op.create_index(op.f('ix_ledger_events_actor_id'), 'ledger_events', ['actor_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_ledger_events_actor_id'), table_name='ledger_events')
    op.drop_index(op.f('ix_ledger_events_asset_id'), table_name='ledger_events')
    op.drop_index(op.f('ix_ledger_events_event_type'), table_name='ledger_events')
    op.drop_table('ledger_events')
    op.drop_index(op.f('ix_fund_movements_asset_id'), table_name='fund_movements')
    op.drop_index(op.f('ix_fund_movements_counterparty_id'), table_name='fund_movements')
    op.drop_table('fund_movements')
    op.drop_table('treasury')
    op.drop_index(op.f('ix_holdings_holder_id'), table_name='holdings')
    op.drop_index(op.f('ix_holdings_asset_id'), table_name='holdings')
    op.drop_table('holdings')
    op.drop_index(op.f('ix_assets_id'), table_name='assets')
    op.drop_table('assets')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')

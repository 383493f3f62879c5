"""create_mirror_tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 10:12:41.204117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MIRROR_TABLES = (
    'xero_accounts',
    'xero_contacts',
    'xero_invoices',
    'xero_payments',
    'xero_purchase_orders',
    'xero_bank_transactions',
    'xero_users',
)

INDEXED_COLUMNS = ('status', 'record_type', 'record_date', 'updated_date_utc')


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table in MIRROR_TABLES:
        if inspector.has_table(table):
            continue
        op.create_table(table,
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('remote_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=64), nullable=True),
        sa.Column('record_type', sa.String(length=64), nullable=True),
        sa.Column('record_class', sa.String(length=64), nullable=True),
        sa.Column('line_amount_types', sa.String(length=32), nullable=True),
        sa.Column('record_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_date_utc', sa.DateTime(timezone=True), nullable=True),
        sa.Column('document', sa.JSON(), nullable=False),
        sa.Column('synced_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f(f'ix_{table}_remote_id'), table, ['remote_id'], unique=True)
        for column in INDEXED_COLUMNS:
            op.create_index(op.f(f'ix_{table}_{column}'), table, [column], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    for table in reversed(MIRROR_TABLES):
        if inspector.has_table(table):
            op.drop_table(table)

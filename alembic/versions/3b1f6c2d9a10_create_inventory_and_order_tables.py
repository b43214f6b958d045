"""create_inventory_and_order_tables

Revision ID: 3b1f6c2d9a10
Revises:
Create Date: 2026-10-19 09:12:04.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3b1f6c2d9a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - Create materials, products, orders and order lines."""
    op.create_table(
        'materials',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('variant', sa.Text(), nullable=True),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('on_hand', sa.Integer(), nullable=False),
        sa.Column('reorder_point', sa.Integer(), nullable=False),
        sa.Column('cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('archived', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('on_hand >= 0', name='ck_materials_on_hand_non_negative'),
        sa.CheckConstraint('reorder_point >= 0', name='ck_materials_reorder_point_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_materials_sku', 'materials', ['sku'], unique=True)
    op.create_index('ix_materials_archived', 'materials', ['archived'], unique=False)

    op.create_table(
        'products',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('variant', sa.Text(), nullable=True),
        sa.Column('sku', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('bom', sa.JSON(), nullable=True),
        sa.Column('archived', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_sku', 'products', ['sku'], unique=True)
    op.create_index('ix_products_archived', 'products', ['archived'], unique=False)

    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('code', sa.String(length=20), nullable=True),
        sa.Column('channel', sa.String(length=50), nullable=False),
        sa.Column('external_id', sa.String(length=100), nullable=True),
        sa.Column('customer_name', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('carrier', sa.Text(), nullable=True),
        sa.Column('tracking', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_orders_code', 'orders', ['code'], unique=True)
    op.create_index('ix_orders_status', 'orders', ['status'], unique=False)
    op.create_index(
        'idx_orders_channel_external_id',
        'orders',
        ['channel', 'external_id'],
        unique=True,
        postgresql_where=sa.text('external_id IS NOT NULL'),
        sqlite_where=sa.text('external_id IS NOT NULL'),
    )

    op.create_table(
        'order_lines',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('order_id', sa.String(length=36), nullable=False),
        sa.Column('product_id', sa.String(length=36), nullable=False),
        sa.Column('qty', sa.Integer(), nullable=False),
        sa.CheckConstraint('qty > 0', name='ck_order_lines_qty_positive'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['product_id'], ['products.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_order_lines_order_id', 'order_lines', ['order_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema - Drop all inventory and order tables."""
    op.drop_index('ix_order_lines_order_id', table_name='order_lines')
    op.drop_table('order_lines')
    op.drop_index('idx_orders_channel_external_id', table_name='orders')
    op.drop_index('ix_orders_status', table_name='orders')
    op.drop_index('ix_orders_code', table_name='orders')
    op.drop_table('orders')
    op.drop_index('ix_products_archived', table_name='products')
    op.drop_index('ix_products_sku', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_materials_archived', table_name='materials')
    op.drop_index('ix_materials_sku', table_name='materials')
    op.drop_table('materials')

"""initial storefront schema

Revision ID: 5f1d2a9c7b31
Revises:
Create Date: 2026-10-19 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5f1d2a9c7b31'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'otp',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('phone', sa.String(15), nullable=False),
        sa.Column('otp', sa.String(6), nullable=False),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('is_used', sa.Boolean()),
    )
    op.create_table(
        'user_profile',
        sa.Column('phone', sa.String(15), primary_key=True),
        sa.Column('name', sa.String(100)),
        sa.Column('preferred_language', sa.String(5), nullable=False, server_default='en'),
        sa.Column('translation_enabled', sa.Boolean()),
        sa.Column('outstanding_amount', sa.Numeric(12, 2)),
        sa.Column('device_info', sa.String(300)),
        sa.Column('created_at', sa.DateTime()),
        sa.Column('last_login_at', sa.DateTime()),
    )
    op.create_table(
        'category',
        sa.Column('id', sa.String(50), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('image', sa.String(255)),
        sa.Column('subcategories', sa.JSON()),
        sa.Column('position', sa.Integer()),
    )
    op.create_table(
        'product',
        sa.Column('id', sa.String(50), primary_key=True),
        sa.Column('category_id', sa.String(50), sa.ForeignKey('category.id'), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('brand', sa.String(80)),
        sa.Column('description', sa.Text()),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('mrp', sa.Float(), nullable=False),
        sa.Column('discount', sa.Float()),
        sa.Column('margin', sa.Float()),
        sa.Column('in_stock', sa.Boolean()),
        sa.Column('weight', sa.String(50)),
        sa.Column('flavor', sa.String(50)),
        sa.Column('pack_type', sa.String(50)),
        sa.Column('image', sa.String(255)),
        sa.Column('offers', sa.JSON()),
        sa.Column('position', sa.Integer()),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_table(
        'cart_item',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_phone', sa.String(15), sa.ForeignKey('user_profile.phone'), nullable=False),
        sa.Column('product_id', sa.String(50), sa.ForeignKey('product.id'), nullable=False),
        sa.Column('quantity', sa.Integer()),
        sa.Column('added_at', sa.DateTime()),
        sa.Column('last_updated', sa.DateTime()),
        sa.UniqueConstraint('user_phone', 'product_id', name='uq_cart_user_product'),
    )
    op.create_table(
        'order',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_phone', sa.String(15), sa.ForeignKey('user_profile.phone'), nullable=False),
        sa.Column('status', sa.String(20)),
        sa.Column('payment_mode', sa.String(10), nullable=False),
        sa.Column('upi_id', sa.String(100)),
        sa.Column('delivery_address', sa.Text(), nullable=False),
        sa.Column('contact_phone', sa.String(15), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('profit_amount', sa.Float(), nullable=False),
        sa.Column('emi_amount', sa.Float(), nullable=False),
        sa.Column('estimated_delivery_at', sa.DateTime(), nullable=False),
        sa.Column('delivered_at', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_order_user_created', 'order', ['user_phone', 'created_at'])
    op.create_table(
        'order_item',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False),
        sa.Column('product_id', sa.String(50), nullable=False),
        sa.Column('name', sa.String(150)),
        sa.Column('unit_price', sa.Numeric(10, 2)),
        sa.Column('mrp', sa.Numeric(10, 2)),
        sa.Column('quantity', sa.Integer()),
        sa.Column('subtotal', sa.Numeric(12, 2)),
    )
    op.create_table(
        'order_status_log',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('updated_by', sa.String(15), nullable=False),
        sa.Column('timestamp', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'notification',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_phone', sa.String(15), sa.ForeignKey('user_profile.phone'), nullable=False),
        sa.Column('key', sa.String(80)),
        sa.Column('title', sa.String(120), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime()),
    )
    op.create_index('ix_notification_user_key', 'notification', ['user_phone', 'key'])
    op.create_table(
        'stored_value',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_phone', sa.String(15), sa.ForeignKey('user_profile.phone'), nullable=False),
        sa.Column('key', sa.String(80), nullable=False),
        sa.Column('value', sa.Text()),
        sa.Column('updated_at', sa.DateTime()),
        sa.UniqueConstraint('user_phone', 'key', name='uq_stored_value_user_key'),
    )


def downgrade():
    op.drop_table('stored_value')
    op.drop_index('ix_notification_user_key', table_name='notification')
    op.drop_table('notification')
    op.drop_table('order_status_log')
    op.drop_table('order_item')
    op.drop_index('ix_order_user_created', table_name='order')
    op.drop_table('order')
    op.drop_table('cart_item')
    op.drop_table('product')
    op.drop_table('category')
    op.drop_table('user_profile')
    op.drop_table('otp')

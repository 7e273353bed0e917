"""initial food truck ordering schema

Revision ID: 5a1f0c2d7e43
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '5a1f0c2d7e43'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'food_truck',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(120), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(255), nullable=True),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('phone_no', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'user',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('phone_no', sa.String(20), nullable=True),
        sa.Column('address', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('food_truck_id', sa.BigInteger(), sa.ForeignKey('food_truck.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'food_truck_schedule',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('food_truck_id', sa.BigInteger(), sa.ForeignKey('food_truck.id'), nullable=False),
        sa.Column('day', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.UniqueConstraint('food_truck_id', 'day', name='uq_schedule_truck_day'),
    )
    op.create_table(
        'category',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
    )
    op.create_table(
        'item',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('food_truck_id', sa.BigInteger(), sa.ForeignKey('food_truck.id'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('slug', sa.String(150), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(255), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_table(
        'category_item',
        sa.Column('category_id', sa.BigInteger(), sa.ForeignKey('category.id'), primary_key=True),
        sa.Column('item_id', sa.BigInteger(), sa.ForeignKey('item.id'), primary_key=True),
    )
    op.create_table(
        'order',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('placed_by_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=True),
        sa.Column('food_truck_id', sa.BigInteger(), sa.ForeignKey('food_truck.id'), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('pickup_datetime', sa.DateTime(), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('ix_order_user_status', 'order', ['user_id', 'status'])
    op.create_table(
        'item_order',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False),
        sa.Column('item_id', sa.BigInteger(), sa.ForeignKey('item.id'), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
    )
    op.create_table(
        'invoice',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False, unique=True),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('payment_method', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'order_status_log',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False),
        sa.Column('status', sa.String(30), nullable=False),
        sa.Column('updated_by', sa.BigInteger(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_table(
        'wallet',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=False, unique=True),
        sa.Column('balance', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.CheckConstraint('balance >= 0', name='ck_wallet_balance_non_negative'),
    )
    op.create_table(
        'transaction',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('wallet_id', sa.BigInteger(), sa.ForeignKey('wallet.id'), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('reference', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )


def downgrade():
    op.drop_table('transaction')
    op.drop_table('wallet')
    op.drop_table('order_status_log')
    op.drop_table('invoice')
    op.drop_table('item_order')
    op.drop_index('ix_order_user_status', table_name='order')
    op.drop_table('order')
    op.drop_table('category_item')
    op.drop_table('item')
    op.drop_table('category')
    op.drop_table('food_truck_schedule')
    op.drop_table('user')
    op.drop_table('food_truck')

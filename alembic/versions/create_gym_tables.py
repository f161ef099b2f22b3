"""create gym tables

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-18 10:12:31

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a9d2b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'staff_users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_staff_users_username', 'staff_users', ['username'], unique=True)

    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('membership_type', sa.String(length=100), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('end_date >= start_date', name='ck_members_date_range'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_members_name', 'members', ['name'])
    op.create_index('ix_members_phone', 'members', ['phone'])
    op.create_index('ix_members_end_date', 'members', ['end_date'])

    op.create_table(
        'packages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('duration_months', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('duration_months >= 0', name='ck_packages_duration'),
        sa.CheckConstraint('price >= 0', name='ck_packages_price'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_packages_is_active', 'packages', ['is_active'])

    op.create_table(
        'payment_methods',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('package_id', sa.Integer(), nullable=True),
        sa.Column('payment_method_id', sa.Integer(), nullable=False),
        sa.Column('kind', sa.Enum('NEW_MEMBERSHIP', 'RENEWAL', 'DAY_PASS', 'OTHER', name='transaction_kind'), nullable=False),
        sa.Column('amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id']),
        sa.ForeignKeyConstraint(['package_id'], ['packages.id']),
        sa.ForeignKeyConstraint(['payment_method_id'], ['payment_methods.id']),
        sa.ForeignKeyConstraint(['created_by'], ['staff_users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_member_id', 'transactions', ['member_id'])
    op.create_index('ix_transactions_created_at', 'transactions', ['created_at'])

    op.create_table(
        'checkins',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('method', sa.Enum('MANUAL', 'QR', 'DAY_PASS', name='checkin_method'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id']),
        sa.ForeignKeyConstraint(['created_by'], ['staff_users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_checkins_member_id', 'checkins', ['member_id'])
    op.create_index('ix_checkins_checked_in_at', 'checkins', ['checked_in_at'])


def downgrade() -> None:
    op.drop_index('ix_checkins_checked_in_at', table_name='checkins')
    op.drop_index('ix_checkins_member_id', table_name='checkins')
    op.drop_table('checkins')
    op.drop_index('ix_transactions_created_at', table_name='transactions')
    op.drop_index('ix_transactions_member_id', table_name='transactions')
    op.drop_table('transactions')
    op.drop_table('payment_methods')
    op.drop_index('ix_packages_is_active', table_name='packages')
    op.drop_table('packages')
    op.drop_index('ix_members_end_date', table_name='members')
    op.drop_index('ix_members_phone', table_name='members')
    op.drop_index('ix_members_name', table_name='members')
    op.drop_table('members')
    op.drop_index('ix_staff_users_username', table_name='staff_users')
    op.drop_table('staff_users')
    sa.Enum(name='checkin_method').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='transaction_kind').drop(op.get_bind(), checkfirst=True)

"""initial agency schema

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000

Creates the agency schema from scratch:
- accounts: owners of every record, authenticated by hashed API key
- customers: travellers (national id, phone, visa status)
- bookings: program bookings with deposit/remaining derived amounts
- visas: visa records with travel route and dates
- expenses / debts: the finance ledger used by reports
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261019_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text('CURRENT_TIMESTAMP')),
    ]


def upgrade():
    # ============================================================================
    # accounts
    # ============================================================================
    op.create_table(
        'accounts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('api_key_hash', sa.String(length=64), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='1'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('api_key_hash'),
    )
    op.create_index('ix_accounts_api_key_hash', 'accounts', ['api_key_hash'])

    # ============================================================================
    # customers
    # ============================================================================
    op.create_table(
        'customers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column('national_id', sa.String(length=64), nullable=False),
        sa.Column('address', sa.String(length=512), nullable=True),
        sa.Column('program_name', sa.String(length=255), nullable=True),
        sa.Column('visa_status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_customers_account_id', 'customers', ['account_id'])
    op.create_index('ix_customers_account_created', 'customers', ['account_id', 'created_at'])

    # ============================================================================
    # bookings: remaining_amount_cents is derived (0 once paid, else total - deposit)
    # ============================================================================
    op.create_table(
        'bookings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        sa.Column('customer_id', sa.String(length=36), nullable=False),
        sa.Column('program_name', sa.String(length=255), nullable=False),
        sa.Column('total_amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('visa_deposit_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('remaining_amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_paid', sa.Boolean(), nullable=False, server_default='0'),
        sa.Column('travel_direction', sa.String(length=16), nullable=False, server_default='egypt-to-saudi'),
        sa.Column('from_location', sa.String(length=128), nullable=True),
        sa.Column('to_location', sa.String(length=128), nullable=True),
        sa.Column('departure_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('total_amount_cents >= 0', name='ck_bookings_total_nonneg'),
        sa.CheckConstraint('visa_deposit_cents >= 0', name='ck_bookings_deposit_nonneg'),
        sa.CheckConstraint('visa_deposit_cents <= total_amount_cents', name='ck_bookings_deposit_le_total'),
        sa.CheckConstraint('remaining_amount_cents >= 0', name='ck_bookings_remaining_nonneg'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bookings_account_id', 'bookings', ['account_id'])
    op.create_index('ix_bookings_customer_id', 'bookings', ['customer_id'])
    op.create_index('ix_bookings_is_paid', 'bookings', ['is_paid'])
    op.create_index('ix_bookings_created_at', 'bookings', ['created_at'])
    op.create_index('ix_bookings_account_created', 'bookings', ['account_id', 'created_at'])

    # ============================================================================
    # visas
    # ============================================================================
    op.create_table(
        'visas',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        sa.Column('customer_id', sa.String(length=36), nullable=False),
        sa.Column('visa_number', sa.String(length=64), nullable=False),
        sa.Column('issue_date', sa.Date(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('departure_date', sa.Date(), nullable=True),
        sa.Column('booking_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('travel_direction', sa.String(length=16), nullable=False, server_default='egypt-to-saudi'),
        sa.Column('from_location', sa.String(length=128), nullable=True),
        sa.Column('to_location', sa.String(length=128), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_visas_account_id', 'visas', ['account_id'])
    op.create_index('ix_visas_customer_id', 'visas', ['customer_id'])
    op.create_index('ix_visas_status', 'visas', ['status'])
    op.create_index('ix_visas_account_created', 'visas', ['account_id', 'created_at'])

    # ============================================================================
    # expenses
    # ============================================================================
    op.create_table(
        'expenses',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('description', sa.String(length=512), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint('amount_cents >= 0', name='ck_expenses_amount_nonneg'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_expenses_account_id', 'expenses', ['account_id'])
    op.create_index('ix_expenses_account_date', 'expenses', ['account_id', 'date'])

    # ============================================================================
    # debts
    # ============================================================================
    op.create_table(
        'debts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('account_id', sa.String(length=36), nullable=False),
        sa.Column('person_name', sa.String(length=255), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('description', sa.String(length=512), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_paid', sa.Boolean(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.CheckConstraint('amount_cents >= 0', name='ck_debts_amount_nonneg'),
        sa.ForeignKeyConstraint(['account_id'], ['accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_debts_account_id', 'debts', ['account_id'])
    op.create_index('ix_debts_is_paid', 'debts', ['is_paid'])
    op.create_index('ix_debts_account_date', 'debts', ['account_id', 'date'])


def downgrade():
    op.drop_table('debts')
    op.drop_table('expenses')
    op.drop_table('visas')
    op.drop_table('bookings')
    op.drop_table('customers')
    op.drop_table('accounts')

"""initial schema: companies, users, slabs, supplies

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

Tables:
1. companies - tenants (marmorarias) with status and monthly fee
2. users - platform admins, company admins and operators
3. slabs / slab_movements - stock entries and their movement history
4. supplies / supply_movements - consumables and ENTRADA/SAIDA history

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'companies',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('admin_id', sa.String(32), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('monthly_fee', sa.Float, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_companies_id', 'companies', ['id'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('company_id', sa.String(32), sa.ForeignKey('companies.id'), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('last_login_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_company_id', 'users', ['company_id'])

    op.create_table(
        'slabs',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('entry_index', sa.Integer, nullable=False),
        sa.Column('company_id', sa.String(32), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('commercial_name', sa.String(200), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('thickness', sa.String(20), nullable=False),
        sa.Column('supplier', sa.String(200), nullable=True),
        sa.Column('location', sa.String(100), nullable=True),
        sa.Column('purchase_value', sa.Float, nullable=True),
        sa.Column('observations', sa.Text, nullable=True),
        sa.Column('original_width', sa.Float, nullable=False),
        sa.Column('original_height', sa.Float, nullable=False),
        sa.Column('current_width', sa.Float, nullable=False),
        sa.Column('current_height', sa.Float, nullable=False),
        sa.Column('current_polygon', sa.JSON, nullable=False),
        sa.Column('total_area', sa.Float, nullable=False),
        sa.Column('available_area', sa.Float, nullable=False),
        sa.Column('quantity', sa.Integer, nullable=False),
        sa.Column('min_quantity', sa.Integer, nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('entry_date', sa.Date, nullable=True),
        sa.Column('last_operator_id', sa.String(32), nullable=True),
        sa.Column('last_operator_name', sa.String(200), nullable=True),
        sa.Column('last_updated_at', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('company_id', 'entry_index', name='uq_slab_company_entry'),
    )
    op.create_index('ix_slabs_id', 'slabs', ['id'])
    op.create_index('ix_slabs_company_id', 'slabs', ['company_id'])
    op.create_index('ix_slabs_status', 'slabs', ['status'])

    op.create_table(
        'slab_movements',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('slab_id', sa.String(32), sa.ForeignKey('slabs.id'), nullable=False),
        sa.Column('sequence', sa.Integer, nullable=False),
        sa.Column('movement_type', sa.String(20), nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
        sa.Column('client_name', sa.String(200), nullable=False),
        sa.Column('project', sa.String(200), nullable=False),
        sa.Column('observations', sa.Text, nullable=True),
        sa.Column('area_used', sa.Float, nullable=False),
        sa.Column('quantity_change', sa.Integer, nullable=False),
        sa.Column('leftover_width', sa.Float, nullable=False),
        sa.Column('leftover_height', sa.Float, nullable=False),
        sa.Column('leftover_polygon', sa.JSON, nullable=False),
        sa.Column('operator_id', sa.String(32), nullable=True),
        sa.Column('operator_name', sa.String(200), nullable=False),
    )
    op.create_index('ix_slab_movements_id', 'slab_movements', ['id'])
    op.create_index('ix_slab_movements_slab_id', 'slab_movements', ['slab_id'])

    op.create_table(
        'supplies',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('company_id', sa.String(32), sa.ForeignKey('companies.id'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('unit', sa.String(20), nullable=False),
        sa.Column('quantity', sa.Float, nullable=False),
        sa.Column('min_quantity', sa.Float, nullable=False),
        sa.Column('supplier', sa.String(200), nullable=True),
        sa.Column('observations', sa.Text, nullable=True),
        sa.Column('last_updated_at', sa.DateTime, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_supplies_id', 'supplies', ['id'])
    op.create_index('ix_supplies_company_id', 'supplies', ['company_id'])

    op.create_table(
        'supply_movements',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('supply_id', sa.String(32), sa.ForeignKey('supplies.id'), nullable=False),
        sa.Column('sequence', sa.Integer, nullable=False),
        sa.Column('movement_type', sa.String(10), nullable=False),
        sa.Column('quantity_change', sa.Float, nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
        sa.Column('operator_id', sa.String(32), nullable=True),
        sa.Column('operator_name', sa.String(200), nullable=False),
        sa.Column('observations', sa.Text, nullable=True),
    )
    op.create_index('ix_supply_movements_id', 'supply_movements', ['id'])
    op.create_index('ix_supply_movements_supply_id', 'supply_movements', ['supply_id'])


def downgrade():
    op.drop_table('supply_movements')
    op.drop_table('supplies')
    op.drop_table('slab_movements')
    op.drop_table('slabs')
    op.drop_table('users')
    op.drop_table('companies')

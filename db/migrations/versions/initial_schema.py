"""Initial schema: company settings, clients, documents, line items

Revision ID: initial_schema
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


document_type = sa.Enum('INVOICE', 'QUOTE', 'PROFORMA', name='documenttype')
document_status = sa.Enum('DRAFT', 'SENT', 'PAID', 'OVERDUE', name='documentstatus')


def upgrade() -> None:
    op.create_table(
        'companysettings',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('company_name', sa.String(), nullable=False),
        sa.Column('company_address', sa.String(), nullable=True),
        sa.Column('company_email', sa.String(), nullable=True),
        sa.Column('company_phone', sa.String(), nullable=True),
        sa.Column('tax_number', sa.String(), nullable=True),
        sa.Column('pan_number', sa.String(), nullable=True),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('bank_name', sa.String(), nullable=True),
        sa.Column('account_number', sa.String(), nullable=True),
        sa.Column('ifsc_code', sa.String(), nullable=True),
        sa.Column('tax_enabled', sa.Boolean(), nullable=False),
        sa.Column('tax_rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('currency', sa.String(), nullable=False),
        sa.Column('default_payment_terms', sa.String(), nullable=True),
        sa.Column('custom_units', sa.JSON(), nullable=False),
        sa.Column('next_invoice_number', sa.Integer(), nullable=False),
        sa.Column('next_quotation_number', sa.Integer(), nullable=False),
        sa.Column('next_proforma_number', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'client',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('tax_number', sa.String(), nullable=True),
        sa.Column('pan_number', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_client_name', 'client', ['name'])

    op.create_table(
        'document',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('document_type', document_type, nullable=False),
        sa.Column('document_number', sa.String(), nullable=False),
        sa.Column('document_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('status', document_status, nullable=False),
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('client_email', sa.String(), nullable=True),
        sa.Column('client_address', sa.String(), nullable=True),
        sa.Column('client_tax_number', sa.String(), nullable=True),
        sa.Column('client_pan_number', sa.String(), nullable=True),
        sa.Column('currency', sa.String(), nullable=False),
        sa.Column('tax_enabled', sa.Boolean(), nullable=False),
        sa.Column('tax_rate', sa.Numeric(5, 2), nullable=False),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_terms', sa.String(), nullable=True),
        sa.Column('notes', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_document_document_type', 'document', ['document_type'])
    op.create_index('ix_document_document_number', 'document', ['document_number'])

    op.create_table(
        'lineitem',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('document_id', sa.String(), sa.ForeignKey('document.id'), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('unit', sa.String(), nullable=False),
        sa.Column('quantity', sa.Numeric(12, 2), nullable=False),
        sa.Column('rate', sa.Numeric(12, 2), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_lineitem_document_id', 'lineitem', ['document_id'])


def downgrade() -> None:
    op.drop_index('ix_lineitem_document_id', table_name='lineitem')
    op.drop_table('lineitem')
    op.drop_index('ix_document_document_number', table_name='document')
    op.drop_index('ix_document_document_type', table_name='document')
    op.drop_table('document')
    op.drop_index('ix_client_name', table_name='client')
    op.drop_table('client')
    op.drop_table('companysettings')
    document_status.drop(op.get_bind(), checkfirst=True)
    document_type.drop(op.get_bind(), checkfirst=True)

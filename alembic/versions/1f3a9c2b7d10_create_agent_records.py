# Plantilla de archivos de versión (migraciones)

"""create agents and onboarding source records

Revision ID: 1f3a9c2b7d10
Revises:
Create Date: 2026-10-18 10:52:11.204311

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '1f3a9c2b7d10'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'agents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(length=120), nullable=False),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('npn', sa.String(length=20), nullable=True),
        sa.Column('onboarding_status', sa.String(length=40), nullable=False, server_default='pending'),
        sa.Column('nipr_status', sa.String(length=40), nullable=True),
        sa.Column('ahip_completion_date', sa.Date(), nullable=True),
        sa.Column('background_check_status', sa.String(length=40), nullable=True),
        sa.Column('created_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_agents_id', 'agents', ['id'])
    op.create_index('ix_agents_email', 'agents', ['email'], unique=True)
    op.create_index('ix_agents_npn', 'agents', ['npn'])

    op.create_table(
        'documents',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('document_type', sa.String(length=60), nullable=False),
        sa.Column('file_name', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=40), nullable=False, server_default='pending'),
        sa.Column('created_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_documents_agent_id', 'documents', ['agent_id'])

    op.create_table(
        'licenses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('state', sa.String(length=2), nullable=False),
        sa.Column('license_number', sa.String(length=40), nullable=True),
        sa.Column('license_type', sa.String(length=40), nullable=True),
        sa.Column('status', sa.String(length=40), nullable=False, server_default='pending'),
        sa.Column('nipr_verified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('nipr_last_check', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expiration_date', sa.Date(), nullable=True),
    )
    op.create_index('ix_licenses_agent_id', 'licenses', ['agent_id'])

    op.create_table(
        'carrier_appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('carrier_name', sa.String(length=160), nullable=False),
        sa.Column('appointment_status', sa.String(length=40), nullable=False, server_default='pending'),
        sa.Column('effective_date', sa.Date(), nullable=True),
    )
    op.create_index('ix_carrier_appointments_agent_id', 'carrier_appointments', ['agent_id'])

    op.create_table(
        'contracts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('carrier_name', sa.String(length=160), nullable=False),
        sa.Column('contract_status', sa.String(length=40), nullable=False, server_default='draft'),
        sa.Column('signed_date', sa.Date(), nullable=True),
    )
    op.create_index('ix_contracts_agent_id', 'contracts', ['agent_id'])

def downgrade():
    op.drop_table('contracts')
    op.drop_table('carrier_appointments')
    op.drop_table('licenses')
    op.drop_table('documents')
    op.drop_index('ix_agents_npn', table_name='agents')
    op.drop_index('ix_agents_email', table_name='agents')
    op.drop_index('ix_agents_id', table_name='agents')
    op.drop_table('agents')

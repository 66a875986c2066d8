# Plantilla de archivos de versión (migraciones)

"""checklist items, badges and alerts

Revision ID: 8c41d0e6a5f2
Revises: 1f3a9c2b7d10
Create Date: 2026-10-18 11:07:45.918032

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '8c41d0e6a5f2'
down_revision = '1f3a9c2b7d10'
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'checklist_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_key', sa.String(length=80), nullable=False),
        sa.Column('item_name', sa.String(length=160), nullable=False),
        sa.Column('category', sa.String(length=40), nullable=False),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_by', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.UniqueConstraint('agent_id', 'item_key', name='uq_checklist_agent_item'),
    )
    op.create_index('ix_checklist_items_agent_id', 'checklist_items', ['agent_id'])

    # La unicidad (agent_id, badge_type) es la que hace idempotente el otorgamiento
    op.create_table(
        'badges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('badge_type', sa.String(length=80), nullable=False),
        sa.Column('badge_name', sa.String(length=120), nullable=False),
        sa.Column('badge_description', sa.Text(), nullable=False, server_default=''),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('earned_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('agent_id', 'badge_type', name='uq_agent_badge'),
    )
    op.create_index('ix_badges_id', 'badges', ['id'])
    op.create_index('ix_badges_agent_id', 'badges', ['agent_id'])

    op.create_table(
        'alerts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('agent_id', sa.Integer(), sa.ForeignKey('agents.id', ondelete='CASCADE'), nullable=False),
        sa.Column('alert_type', sa.String(length=80), nullable=False),
        sa.Column('severity', sa.String(length=20), nullable=False, server_default='warning'),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_resolved', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('resolved_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('related_entity_type', sa.String(length=40), nullable=True),
        sa.Column('related_entity_id', sa.Integer(), nullable=True),
        sa.Column('created_date', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_alerts_agent_id', 'alerts', ['agent_id'])
    op.create_index('ix_alerts_alert_type', 'alerts', ['alert_type'])
    op.create_index(
        'uq_alerts_open_agent_type', 'alerts', ['agent_id', 'alert_type'], unique=True,
        sqlite_where=sa.text('NOT is_resolved'), postgresql_where=sa.text('NOT is_resolved'),
    )

def downgrade():
    op.drop_index('uq_alerts_open_agent_type', table_name='alerts')
    op.drop_table('alerts')
    op.drop_table('badges')
    op.drop_table('checklist_items')

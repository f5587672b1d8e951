"""create plantation tables

Revision ID: 001_create_plantation_tables
Revises:
Create Date: 2026-01-12
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '001_create_plantation_tables'
down_revision: Union[str, Sequence[str], None] = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # --- Reference data ---
    op.create_table(
        'districts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        'soil_types',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
    )

    op.create_table(
        'pepper_varieties',
        sa.Column('id', sa.String(50), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
    )

    # --- Farms ---
    op.create_table(
        'farms',
        sa.Column('id', sa.UUID(as_uuid=False), primary_key=True),
        sa.Column('user_id', sa.UUID(as_uuid=False), nullable=False),
        sa.Column('farm_name', sa.String(255), nullable=False),
        sa.Column('district_id', sa.Integer(), nullable=True),
        sa.Column('soil_type_id', sa.Integer(), nullable=True),
        sa.Column('chosen_variety_id', sa.String(50), nullable=True),
        sa.Column('farm_start_date', sa.DateTime(), nullable=True),
        sa.Column('area_hectares', sa.Numeric(), nullable=True),
        sa.Column('total_vines', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['district_id'], ['districts.id']),
        sa.ForeignKeyConstraint(['soil_type_id'], ['soil_types.id']),
        sa.ForeignKeyConstraint(['chosen_variety_id'], ['pepper_varieties.id']),
    )

    op.create_index('ix_farms_user_id', 'farms', ['user_id'])

    # --- Agronomy templates ---
    op.create_table(
        'agronomy_templates',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('task_name', sa.String(255), nullable=False),
        sa.Column('phase', sa.String(50), nullable=True),
        sa.Column('task_type', sa.String(50), nullable=False),
        sa.Column('variety_key', sa.String(50), nullable=False),
        sa.Column('timing_days_after_start', sa.Integer(), nullable=False),
        sa.Column('detailed_steps', postgresql.JSONB(), nullable=True),
    )

    op.create_index('ix_agronomy_templates_variety_key', 'agronomy_templates', ['variety_key'])

    # --- Farm tasks ---
    op.create_table(
        'farm_tasks',
        sa.Column('id', sa.UUID(as_uuid=False), primary_key=True),
        sa.Column('farm_id', sa.UUID(as_uuid=False), nullable=False),
        sa.Column('task_name', sa.String(255), nullable=False),
        sa.Column('phase', sa.String(50), nullable=False),
        sa.Column('task_type', sa.String(50), nullable=False),
        sa.Column('variety_key', sa.String(50), nullable=False),
        sa.Column('due_date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('date_completed', sa.DateTime(), nullable=True),
        sa.Column('input_details', postgresql.JSONB(), nullable=True),
        sa.Column('detailed_steps', postgresql.JSONB(), nullable=True),
        sa.Column('reason_why', sa.Text(), nullable=True),
        sa.Column('is_manual', sa.Boolean(), nullable=False),
        sa.Column('priority', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
    )

    op.create_index('ix_farm_tasks_farm_id', 'farm_tasks', ['farm_id'])

    # --- Harvest seasons ---
    op.create_table(
        'harvest_seasons',
        sa.Column('id', sa.UUID(as_uuid=False), primary_key=True),
        sa.Column('season_name', sa.String(100), nullable=False),
        sa.Column('start_month', sa.Integer(), nullable=False),
        sa.Column('start_year', sa.Integer(), nullable=False),
        sa.Column('end_month', sa.Integer(), nullable=False),
        sa.Column('end_year', sa.Integer(), nullable=False),
        sa.Column('farm_id', sa.UUID(as_uuid=False), nullable=False),
        sa.Column('total_harvested_yield', sa.Numeric(), nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('created_by', sa.UUID(as_uuid=False), nullable=False),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
    )

    op.create_index('ix_harvest_seasons_farm_id', 'harvest_seasons', ['farm_id'])
    op.create_index('ix_harvest_seasons_created_by', 'harvest_seasons', ['created_by'])


def downgrade() -> None:
    op.drop_index('ix_harvest_seasons_created_by', table_name='harvest_seasons')
    op.drop_index('ix_harvest_seasons_farm_id', table_name='harvest_seasons')
    op.drop_table('harvest_seasons')
    op.drop_index('ix_farm_tasks_farm_id', table_name='farm_tasks')
    op.drop_table('farm_tasks')
    op.drop_index('ix_agronomy_templates_variety_key', table_name='agronomy_templates')
    op.drop_table('agronomy_templates')
    op.drop_index('ix_farms_user_id', table_name='farms')
    op.drop_table('farms')
    op.drop_table('pepper_varieties')
    op.drop_table('soil_types')
    op.drop_table('districts')

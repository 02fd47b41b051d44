"""Initial wellness schema

Revision ID: 001_initial_wellness_schema
Revises:
Create Date: 2025-09-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_initial_wellness_schema'
down_revision = None
branch_labels = None
depends_on = None

json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_companies_id', 'companies', ['id'])
    op.create_index('ix_companies_company_id', 'companies', ['company_id'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('company_id', sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_company_id', 'users', ['company_id'])

    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('emp_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('contact_info', sa.String(255), nullable=True),
        sa.Column('medical_history', sa.Text(), nullable=True),
        sa.Column('current_condition', sa.Text(), nullable=True),
        sa.Column('assigned_nutritionist', sa.String(200), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('present_readings', sa.Text(), nullable=True),
        sa.Column('next_target', sa.Text(), nullable=True),
        sa.Column('given_plan', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'client_id', name='uq_clients_company_client'),
    )
    op.create_index('ix_clients_id', 'clients', ['id'])
    op.create_index('ix_clients_company_id', 'clients', ['company_id'])
    op.create_index('ix_clients_client_id', 'clients', ['client_id'])

    op.create_table(
        'intake_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('company_name', sa.String(200), nullable=True),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('emp_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(200), nullable=True),
        sa.Column('contact_info', sa.String(255), nullable=True),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('medical_history', sa.Text(), nullable=True),
        sa.Column('current_condition', sa.Text(), nullable=True),
        sa.Column('assigned_nutritionist', sa.String(200), nullable=True),
        sa.Column('first_followup_at', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(20), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('present_readings', sa.Text(), nullable=True),
        sa.Column('next_target', sa.Text(), nullable=True),
        sa.Column('given_plan', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('plan_file_name', sa.String(200), nullable=True),
        sa.Column('plan_file_type', sa.String(100), nullable=True),
        sa.Column('plan_file_size', sa.Integer(), nullable=True),
        sa.Column('plan_file_base64', sa.Text(), nullable=True),
        sa.Column('plan_file_uploaded_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', sa.String(200), nullable=True),
        sa.Column('updated_by', sa.String(200), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_intake_records_id', 'intake_records', ['id'])
    op.create_index('idx_intake_records_company_client', 'intake_records', ['company_id', 'client_id'])

    op.create_table(
        'followups',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=False),
        sa.Column('scheduled_at', sa.DateTime(), nullable=True),
        sa.Column('followup_date', sa.DateTime(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('assigned_nutritionist', sa.String(200), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('present_readings', sa.Text(), nullable=True),
        sa.Column('next_target', sa.Text(), nullable=True),
        sa.Column('given_plan', sa.Text(), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('bmi', sa.Float(), nullable=True),
        sa.Column('bp', sa.String(20), nullable=True),
        sa.Column('sugar', sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_followups_id', 'followups', ['id'])
    op.create_index('ix_followups_company_id', 'followups', ['company_id'])
    op.create_index('ix_followups_client_id', 'followups', ['client_id'])
    op.create_index('ix_followups_status', 'followups', ['status'])
    op.create_index(
        'idx_followups_company_client_status_sched',
        'followups',
        ['company_id', 'client_id', 'status', 'scheduled_at'],
    )

    op.create_table(
        'questionnaire_submissions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('answers', json_type, nullable=False),
        sa.Column('computed', json_type, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_questionnaire_submissions_id', 'questionnaire_submissions', ['id'])
    op.create_index('ix_questionnaire_submissions_user_id', 'questionnaire_submissions', ['user_id'])
    op.create_index('idx_questionnaire_user_created', 'questionnaire_submissions', ['user_id', 'created_at'])

    op.create_table(
        'alerts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('for_user', sa.String(200), nullable=False),
        sa.Column('title', sa.String(200), nullable=True),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('company_id', sa.Integer(), nullable=True),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('read_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_alerts_id', 'alerts', ['id'])
    op.create_index('idx_alerts_for_user_created', 'alerts', ['for_user', 'created_at'])


def downgrade():
    op.drop_table('alerts')
    op.drop_table('questionnaire_submissions')
    op.drop_table('followups')
    op.drop_table('intake_records')
    op.drop_table('clients')
    op.drop_table('users')
    op.drop_table('companies')

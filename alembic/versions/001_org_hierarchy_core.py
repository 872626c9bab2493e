"""Organization hierarchy core: branches, departments, employees, audit logs

Revision ID: 001_org_hierarchy_core
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_org_hierarchy_core'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    # Use CURRENT_TIMESTAMP so it works on both SQLite and Postgres
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade() -> None:
    # Skip tables that already exist (e.g. created by create_all() on SQLite)
    bind = op.get_bind()
    existing = sa.inspect(bind).get_table_names()

    if 'branches' not in existing:
        op.create_table(
            'branches',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('address', sa.String(), nullable=True),
            sa.Column('contact_number', sa.String(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_branches_name'), 'branches', ['name'], unique=True)

    if 'departments' not in existing:
        # branch_id / manager_id are plain columns, not foreign keys
        op.create_table(
            'departments',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('branch_id', sa.String(length=36), nullable=True),
            sa.Column('manager_id', sa.String(length=36), nullable=True),
            sa.Column('location', sa.String(), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_departments_name'), 'departments', ['name'], unique=False)
        op.create_index(op.f('ix_departments_branch_id'), 'departments', ['branch_id'], unique=False)

    if 'employees' not in existing:
        op.create_table(
            'employees',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('first_name', sa.String(), nullable=False),
            sa.Column('last_name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('system_access_role', sa.String(), nullable=True),
            sa.Column('department_id', sa.String(length=36), nullable=True),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_employees_email'), 'employees', ['email'], unique=True)
        op.create_index(op.f('ix_employees_department_id'), 'employees', ['department_id'], unique=False)

    if 'audit_logs' not in existing:
        op.create_table(
            'audit_logs',
            sa.Column('id', sa.String(length=36), nullable=False),
            sa.Column('table_name', sa.String(), nullable=False),
            sa.Column('record_id', sa.String(length=36), nullable=False),
            sa.Column('action', sa.String(), nullable=False),
            sa.Column('old_data', sa.JSON(), nullable=True),
            sa.Column('new_data', sa.JSON(), nullable=True),
            sa.Column('performed_by', sa.String(length=36), nullable=True),
            sa.Column('performed_at', sa.DateTime(timezone=True), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('ix_audit_logs_table_action', 'audit_logs', ['table_name', 'action'], unique=False)
        op.create_index('ix_audit_logs_performed_at', 'audit_logs', ['performed_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_audit_logs_performed_at', table_name='audit_logs')
    op.drop_index('ix_audit_logs_table_action', table_name='audit_logs')
    op.drop_table('audit_logs')
    op.drop_index(op.f('ix_employees_department_id'), table_name='employees')
    op.drop_index(op.f('ix_employees_email'), table_name='employees')
    op.drop_table('employees')
    op.drop_index(op.f('ix_departments_branch_id'), table_name='departments')
    op.drop_index(op.f('ix_departments_name'), table_name='departments')
    op.drop_table('departments')
    op.drop_index(op.f('ix_branches_name'), table_name='branches')
    op.drop_table('branches')
